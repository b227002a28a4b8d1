from ..steps import Compare, Swap

ALGORITHM_INFO = {
    "name": "Selection Sort",
    "family": "Sorting"
}


def generate_selection_sort_steps(initial_array: list):
    """
    Yield the selection sort trace for `initial_array`.

    The suffix scan compares each element against the current minimum. The
    closing swap is skipped when the minimum is already in place.
    """
    arr = list(initial_array)
    n = len(arr)

    for i in range(n - 1):
        min_idx = i
        for j in range(i + 1, n):
            yield Compare(min_idx, j)
            if arr[j] < arr[min_idx]:
                min_idx = j

        if min_idx != i:
            arr[i], arr[min_idx] = arr[min_idx], arr[i]
            yield Swap(i, min_idx)
