from ..steps import Compare, Overwrite

ALGORITHM_INFO = {
    "name": "Merge Sort",
    "family": "Sorting"
}


def generate_merge_sort_steps(initial_array: list):
    """
    Yield the top-down merge sort trace for `initial_array`.

    Merging reads from a snapshot of the active region and writes back into
    the working array, so only Compare and Overwrite steps are produced.
    Compare indices are the source positions of the two candidates.
    """
    arr = list(initial_array)
    if len(arr) > 1:
        yield from _merge_sort(arr, 0, len(arr) - 1)


def _merge_sort(arr, lo, hi):
    if lo >= hi:
        return
    mid = (lo + hi) // 2
    yield from _merge_sort(arr, lo, mid)
    yield from _merge_sort(arr, mid + 1, hi)
    yield from _merge(arr, lo, mid, hi)


def _merge(arr, lo, mid, hi):
    aux = arr[lo:hi + 1]
    i, j, k = lo, mid + 1, lo

    while i <= mid and j <= hi:
        yield Compare(i, j)
        # Ties take the left run, which keeps the sort stable.
        if aux[i - lo] <= aux[j - lo]:
            arr[k] = aux[i - lo]
            i += 1
        else:
            arr[k] = aux[j - lo]
            j += 1
        yield Overwrite(k, arr[k])
        k += 1

    while i <= mid:
        arr[k] = aux[i - lo]
        yield Overwrite(k, arr[k])
        i += 1
        k += 1

    while j <= hi:
        arr[k] = aux[j - lo]
        yield Overwrite(k, arr[k])
        j += 1
        k += 1
