# axauto/pathgen.py
"""
@file pathgen.py
@brief Turns a located ancestry into a replayable index path.

Searching is expensive; once a node has been found, the child index taken
at every level can be recorded and replayed directly through cached
children on a tree of the same shape.

Generated function format (pinned):

    def my_element(root):
        return (root             # **** ROLE          | ROLE DESC.  | DESCRIPTION          ****
            .cached_children[0]  # **** AXApplication | application | Control Center       ****
            .cached_children[2]  # **** AXGroup       | group       | <AXEmptyDescription> ****
        )

One access line per ancestor (the matched node itself gets none), each
annotated with the role, role description and description of the ancestor
being indexed. Columns are as wide as their longest entry, header included;
once role + role description + description would exceed the configured
threshold (44) the description column is only padded up to what remains.
"""

from __future__ import annotations
import keyword
import re
from typing import TYPE_CHECKING, Any, Iterable, List, NamedTuple, Optional, Sequence, Union

from .config import AXConfig

if TYPE_CHECKING:
    from .node import Node

HEADER_ROLE = "ROLE"
HEADER_ROLE_DESCRIPTION = "ROLE DESC."
HEADER_DESCRIPTION = "DESCRIPTION"


class PathStep(NamedTuple):
    index: int
    role: str
    description: str
    role_description: str


# Line breaks and other control characters would end the # comment early.
_CONTROL = re.compile(r"[\x00-\x1f\x7f-\x9f\u2028\u2029]+")


def _text(value: Any, placeholder: str) -> str:
    return placeholder if value is None else str(value)


def _flat(text: str) -> str:
    return _CONTROL.sub(" ", text)


def _index_of(children: Sequence["Node"], target: "Node") -> int:
    for i, child in enumerate(children):
        if child is target:
            return i
    for i, child in enumerate(children):
        if child == target:
            return i
    return -1


def describe_ancestry(ancestry: Sequence["Node"]) -> List[PathStep]:
    """
    Record, for every ancestor but the last, the index of the next ancestry
    element within that ancestor's cached children.

    @throws ValueError if ancestry is empty or None, or if an element is not
            among its parent's cached children
    """
    if not ancestry:
        raise ValueError("empty ancestry")
    cfg = AXConfig.current()
    steps: List[PathStep] = []
    for depth, (ancestor, nxt) in enumerate(zip(ancestry, ancestry[1:])):
        index = _index_of(ancestor.cached_children, nxt)
        if index < 0:
            raise ValueError(f"ancestry[{depth + 1}] is not a cached child of ancestry[{depth}]")
        steps.append(PathStep(
            index=index,
            role=_text(ancestor.get("role"), cfg.unknown_role),
            description=_text(ancestor.get("description"), cfg.empty_description),
            role_description=_text(ancestor.get("roleDescription"), cfg.empty_role_description),
        ))
    return steps


def _pad(word: str, width: int) -> str:
    return word.ljust(width) if width > 0 else word


def render_path_function(
    steps: Sequence[PathStep],
    with_comments: bool = True,
    function_name: str = "my_element",
    threshold: Optional[int] = None,
) -> str:
    """Render recorded steps as the source of a function taking a root node."""
    if not function_name.isidentifier() or keyword.iskeyword(function_name):
        raise ValueError(f"invalid function name: {function_name!r}")
    if threshold is None:
        threshold = AXConfig.current().comment_width_threshold

    steps = [s._replace(role=_flat(s.role), description=_flat(s.description),
                        role_description=_flat(s.role_description)) for s in steps]
    head = "    return (root"
    accesses = [f"        .cached_children[{int(s.index)}]" for s in steps]

    if not with_comments:
        body = [head] + accesses
    else:
        role_w = max(len(x) for x in [HEADER_ROLE] + [s.role for s in steps])
        rdesc_w = max(len(x) for x in [HEADER_ROLE_DESCRIPTION] + [s.role_description for s in steps])
        desc_w = max(len(x) for x in [HEADER_DESCRIPTION] + [s.description for s in steps])
        if role_w + rdesc_w + desc_w > threshold:
            desc_w = min(desc_w, max(threshold - role_w - rdesc_w, 0))

        code_w = max(len(x) for x in [head] + accesses)

        def columns(role: str, rdesc: str, desc: str) -> str:
            return f"{_pad(role, role_w)} | {_pad(rdesc, rdesc_w)} | {_pad(desc, desc_w)}"

        header = columns(HEADER_ROLE, HEADER_ROLE_DESCRIPTION, HEADER_DESCRIPTION)
        body = [f"{head.ljust(code_w)}  # **** {header} ****"]
        for step, access in zip(steps, accesses):
            cols = columns(step.role, step.role_description, step.description)
            body.append(f"{access.ljust(code_w)}  # **** {cols} ****")

    lines = [f"def {function_name}(root):"] + body + ["    )"]
    return "\n".join(lines) + "\n"


def generate_path_function(
    ancestry: Sequence["Node"],
    with_comments: bool = True,
    function_name: str = "my_element",
) -> str:
    """Describe an ancestry and render it as a replayable function."""
    return render_path_function(describe_ancestry(ancestry), with_comments, function_name)


def replay_path(root: "Node", path: Iterable[Union[PathStep, int]]) -> Optional["Node"]:
    """
    Follow recorded indices through cached children.

    @return the reached node, or None if the tree no longer has that shape
    """
    node = root
    for step in path:
        index = step.index if isinstance(step, PathStep) else int(step)
        children = node.cached_children
        if index < 0 or index >= len(children):
            return None
        node = children[index]
    return node
