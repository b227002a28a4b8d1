from ..steps import Compare, Swap

ALGORITHM_INFO = {
    "name": "Bubble Sort",
    "family": "Sorting"
}


def generate_bubble_sort_steps(initial_array: list):
    """
    Yield the bubble sort trace for `initial_array`.

    Works on a private copy. Every adjacent pair is compared on every pass
    (no early exit), so an n-element input always yields n(n-1)/2 compares.
    """
    arr = list(initial_array)
    n = len(arr)

    for i in range(n - 1):
        for j in range(0, n - i - 1):
            yield Compare(j, j + 1)
            if arr[j] > arr[j + 1]:
                arr[j], arr[j + 1] = arr[j + 1], arr[j]
                yield Swap(j, j + 1)
