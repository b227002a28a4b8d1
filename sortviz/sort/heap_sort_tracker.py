from ..steps import Compare, Swap

ALGORITHM_INFO = {
    "name": "Heap Sort",
    "family": "Sorting"
}


def generate_heap_sort_steps(initial_array: list):
    """
    Yield the heap sort trace for `initial_array`.

    Phase one builds a max-heap bottom-up; phase two repeatedly swaps the
    root with the last unsorted slot and sifts the new root down.
    """
    arr = list(initial_array)
    n = len(arr)

    for i in range(n // 2 - 1, -1, -1):
        yield from _sift_down(arr, n, i)

    for end in range(n - 1, 0, -1):
        arr[0], arr[end] = arr[end], arr[0]
        yield Swap(0, end)
        yield from _sift_down(arr, end, 0)


def _sift_down(arr, heap_size, i):
    while True:
        largest = i
        l = 2 * i + 1
        r = 2 * i + 2

        if l < heap_size:
            yield Compare(l, largest)
            if arr[l] > arr[largest]:
                largest = l
        if r < heap_size:
            yield Compare(r, largest)
            if arr[r] > arr[largest]:
                largest = r

        if largest == i:
            return
        arr[i], arr[largest] = arr[largest], arr[i]
        yield Swap(i, largest)
        i = largest
