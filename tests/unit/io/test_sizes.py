from __future__ import annotations

import pytest

from cachefile.io.sizes import BLOCK_SIZE, likely_size_on_disk


@pytest.mark.parametrize(
    "size,expected",
    [
        (0, 0),
        (1, 4096),
        (4095, 4096),
        (4096, 4096),
        (4097, 8192),
        (10 * 4096 + 17, 11 * 4096),
    ],
)
def test_likely_size_on_disk_rounds_up_to_block(size: int, expected: int) -> None:
    assert likely_size_on_disk(size) == expected


def test_likely_size_on_disk_invariants() -> None:
    for n in list(range(0, 3 * BLOCK_SIZE, 97)) + [2**40 + 1]:
        rounded = likely_size_on_disk(n)
        assert rounded >= n
        assert rounded % BLOCK_SIZE == 0
        assert rounded - n < BLOCK_SIZE


def test_likely_size_on_disk_rejects_negative() -> None:
    with pytest.raises(ValueError):
        likely_size_on_disk(-1)
