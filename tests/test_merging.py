from collections import Counter

from voxelworld.merging import merge_arrays


def test_descending_inputs_merge_into_descending_output():
    inputs = [[9, 7, 3], [8, 8, 1], [], [10, 2]]
    merged = merge_arrays(inputs)
    flat = [value for seq in inputs for value in seq]
    assert merged == sorted(flat, reverse=True)


def test_output_is_a_permutation_of_inputs():
    inputs = [[5, 1, 4], [2, 2], [3]]
    merged = merge_arrays(inputs)
    assert Counter(merged) == Counter(v for seq in inputs for v in seq)


def test_empty_inputs():
    assert merge_arrays([]) == []
    assert merge_arrays([[], [], []]) == []


def test_greatest_head_is_taken_each_step():
    assert merge_arrays([[1, 3], [2, 4]]) == [2, 4, 1, 3]


def test_accepts_generators():
    merged = merge_arrays(iter([range(6, 0, -2), range(5, 0, -2)]))
    assert merged == sorted(list(range(6, 0, -2)) + list(range(5, 0, -2)), reverse=True)