from ..steps import Compare, Swap

ALGORITHM_INFO = {
    "name": "Quick Sort (Lomuto Partition)",
    "family": "Sorting"
}


def generate_quicksort_steps(initial_array: list):
    """
    Yield the quicksort trace (Lomuto partition, pivot = last element).

    Every partition exchange is emitted as a Swap, including the self-swaps
    the textbook scheme performs, followed by the pivot placement swap.
    An explicit call stack stands in for recursion so already-sorted inputs
    of a few thousand elements do not hit the interpreter recursion limit.
    """
    arr = list(initial_array)
    n = len(arr)

    # LIFO: the left part is pushed last so it is processed first
    call_stack = [(0, n - 1)]

    while call_stack:
        low, high = call_stack.pop()
        if low >= high:
            continue

        pivot = arr[high]
        i = low - 1
        for j in range(low, high):
            yield Compare(j, high)
            if arr[j] <= pivot:
                i += 1
                arr[i], arr[j] = arr[j], arr[i]
                yield Swap(i, j)

        pi = i + 1
        arr[pi], arr[high] = arr[high], arr[pi]
        yield Swap(pi, high)

        call_stack.append((pi + 1, high))
        call_stack.append((low, pi - 1))
