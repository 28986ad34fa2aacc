import sys
from pathlib import Path
from typing import Callable

from pytest import fixture

# make sure tests can import helpers
sys.path.append(str(Path(__file__).parent))

from helpers.massif_text import HEADERS_A, massif_text  # noqa: E402


@fixture
def write_massif(tmp_path: Path) -> Callable[[str, str], Path]:
    """
    Fixture to write massif text to a file in the test's temporary directory.
    """

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text)
        return path

    return _write


@fixture
def massif_a(write_massif) -> Path:
    return write_massif(
        "massif.out.a",
        massif_text(HEADERS_A, (0, ["time=100", "mem_heap_B=500"])),
    )


@fixture
def massif_b(write_massif) -> Path:
    return write_massif(
        "massif.out.b", massif_text([], (0, ["time=50", "mem_heap_B=300"]))
    )
