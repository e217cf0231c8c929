"""
Unit tests for random sources.
"""
import numpy as np
import pytest
from minesweeper import NumpyRandomSource, SeededRandomSource, SystemRandomSource

from conftest import ScriptedRandomSource


class TestShuffle:
    """Test Fisher-Yates shuffling through each source."""

    @pytest.mark.parametrize(
        "source",
        [SystemRandomSource(), SeededRandomSource(3), NumpyRandomSource(np.random.default_rng(3))],
    )
    def test_shuffle_is_a_permutation(self, source) -> None:
        items = list(range(50))
        source.shuffle(items)
        assert sorted(items) == list(range(50))

    @pytest.mark.parametrize(
        "source", [SystemRandomSource(), SeededRandomSource(), NumpyRandomSource()]
    )
    def test_randbelow_in_range(self, source) -> None:
        values = {source.randbelow(4) for _ in range(200)}
        assert values <= {0, 1, 2, 3}

    def test_seeded_source_is_reproducible(self) -> None:
        first, second = list(range(30)), list(range(30))
        SeededRandomSource(7).shuffle(first)
        SeededRandomSource(7).shuffle(second)
        assert first == second

    def test_numpy_source_follows_generator_seed(self) -> None:
        first, second = list(range(30)), list(range(30))
        NumpyRandomSource(np.random.default_rng(11)).shuffle(first)
        NumpyRandomSource(np.random.default_rng(11)).shuffle(second)
        assert first == second

    def test_numpy_source_returns_python_int(self) -> None:
        assert type(NumpyRandomSource().randbelow(10)) is int

    def test_shuffle_of_short_lists(self) -> None:
        empty, single = [], [1]
        SeededRandomSource(0).shuffle(empty)
        SeededRandomSource(0).shuffle(single)
        assert empty == []
        assert single == [1]


class TestFisherYates:
    """Test the shuffle algorithm against scripted draws."""

    def test_draws_cover_every_remaining_position(self) -> None:
        source = ScriptedRandomSource([0, 0, 0])
        items = [0, 1, 2, 3]
        source.shuffle(items)
        assert source.bounds == [4, 3, 2]
        assert items == [1, 2, 3, 0]

    def test_drawing_the_current_index_keeps_order(self) -> None:
        source = ScriptedRandomSource([4, 3, 2, 1])
        items = list("abcde")
        source.shuffle(items)
        assert source.bounds == [5, 4, 3, 2]
        assert items == list("abcde")

    def test_mixed_draws(self) -> None:
        source = ScriptedRandomSource([2, 2, 1])
        items = ["a", "b", "c", "d"]
        source.shuffle(items)
        assert items == ["a", "b", "d", "c"]
