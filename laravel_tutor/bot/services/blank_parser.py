"""Splitting fill-in-the-blank templates and rebuilding the solved code.

Blanks are written as [[BLANK_1]], [[BLANK_2]], ... in the template. Grading
addresses blanks by their order of appearance, while reconstruct() matches
them by the number in the token. Both agree only when the numbers start at 1,
are contiguous and appear in increasing order; templates are not checked for
this.
"""
import re
from dataclasses import dataclass
from typing import List, Union

PLACEHOLDER_RE = re.compile(r"\[\[BLANK_\d+\]\]")
_SPLIT_RE = re.compile(r"(\[\[BLANK_\d+\]\])")


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class Placeholder:
    index: int  # zero-based, by order of appearance


Segment = Union[Literal, Placeholder]


def parse_template(template: str) -> List[Segment]:
    """Split a template into literal code and placeholders, left to right."""
    segments: List[Segment] = []
    blank_index = 0
    for part in _SPLIT_RE.split(template):
        if not part:
            continue
        if PLACEHOLDER_RE.fullmatch(part):
            segments.append(Placeholder(blank_index))
            blank_index += 1
        else:
            segments.append(Literal(part))
    return segments


def count_placeholders(template: str) -> int:
    return len(PLACEHOLDER_RE.findall(template))


def reconstruct(setup_code: str, template: str, solution: List[str]) -> str:
    """Fill every [[BLANK_n]] with solution[n-1] and prepend the setup code.

    Tokens numbered beyond len(solution) stay in the output as they are.
    """
    code = template
    for number, answer in enumerate(solution, start=1):
        code = code.replace(f"[[BLANK_{number}]]", answer, 1)
    return setup_code + code
