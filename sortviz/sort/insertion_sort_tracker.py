from ..steps import Compare, Overwrite

ALGORITHM_INFO = {
    "name": "Insertion Sort",
    "family": "Sorting"
}


def generate_insertion_sort_steps(initial_array: list):
    """
    Yield the insertion sort trace for `initial_array`.

    The key is lifted out of the array; each shift check compares the
    candidate at j with the hole at j+1, each shift is an Overwrite of the
    hole, and the key is always written back with a final Overwrite.
    """
    arr = list(initial_array)

    for i in range(1, len(arr)):
        key = arr[i]
        j = i - 1
        while j >= 0:
            yield Compare(j, j + 1)
            if arr[j] <= key:
                break
            arr[j + 1] = arr[j]
            yield Overwrite(j + 1, arr[j])
            j -= 1

        arr[j + 1] = key
        yield Overwrite(j + 1, key)
