from .bubble_sort_tracker import generate_bubble_sort_steps
from .selection_sort_tracker import generate_selection_sort_steps
from .insertion_sort_tracker import generate_insertion_sort_steps
from .merge_sort_tracker import generate_merge_sort_steps
from .quicksort_tracker import generate_quicksort_steps
from .heap_sort_tracker import generate_heap_sort_steps

__all__ = [
    "generate_bubble_sort_steps",
    "generate_selection_sort_steps",
    "generate_insertion_sort_steps",
    "generate_merge_sort_steps",
    "generate_quicksort_steps",
    "generate_heap_sort_steps",
]
