from typing import List, Sequence, Tuple

HEADERS_A = ["desc: x", "cmd: y", "time_unit: i"]
HEADERS_B = ["desc: --detailed-freq=1", "cmd: ./other", "time_unit: ms"]


def massif_text(headers: Sequence[str], *snapshots: Tuple[int, List[str]]) -> str:
    """
    Build the text of a massif output file.

    :param headers: list of header lines
    :param snapshots: list of ``(index, content_lines)`` tuples
    """
    lines = list(headers)
    for index, contents in snapshots:
        lines += ["#-----------", f"snapshot={index}", "#-----------"]
        lines += contents

    return "\n".join(lines) + "\n"


def snapshot_body(time: int, heap: int) -> List[str]:
    """
    :returns: the content lines of a typical massif snapshot
    """
    return [
        f"time={time}",
        f"mem_heap_B={heap}",
        "mem_heap_extra_B=0",
        "mem_stacks_B=0",
        "heap_tree=empty",
    ]
