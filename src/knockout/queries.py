"""
Structural queries over a bracket.

Every search is a depth-first, left-before-right walk of the arena; nodes are
compared by arena index, never by name, when identity matters (LCA).
"""
from typing import Callable, Iterator, List, Optional, Tuple

from knockout.models import ROOT, TOTAL_ROUNDS, Node, depth, is_leaf_index, left_child, parent, right_child

# (match_id, round) returned when two players can never meet.
NEVER_MEET = (-1, -1)


def _is_leaf(node: Node) -> bool:
    return node.is_leaf


def _is_match(node: Node) -> bool:
    return not node.is_leaf


def iter_subtree(bracket, root: int = ROOT, postorder: bool = False) -> Iterator[Node]:
    """
    Yield the nodes under ``root`` depth-first, left subtree before right.

    Pre-order yields a match before its players; post-order yields it after them.
    """
    node = bracket.node(root)
    if node is None:
        return
    if not postorder:
        yield node
    if not is_leaf_index(root):
        yield from iter_subtree(bracket, left_child(root), postorder)
        yield from iter_subtree(bracket, right_child(root), postorder)
    if postorder:
        yield node


def depth_first_search(bracket, predicate: Callable[[Node], bool],
                       classifier: Callable[[Node], bool] = lambda node: True,
                       root: int = ROOT, postorder: bool = False) -> Optional[Node]:
    """First node (in traversal order) accepted by both the classifier and the predicate."""
    for node in iter_subtree(bracket, root, postorder):
        if classifier(node) and predicate(node):
            return node
    return None


def find_leaf_by_name(bracket, name: str, root: int = ROOT) -> Optional[Node]:
    """Player leaf with this name; match nodes won by the player are never returned."""
    return depth_first_search(bracket, lambda node: node.name == name, _is_leaf, root)


def find_match_by_id(bracket, match_id: int, root: int = ROOT) -> Optional[Node]:
    return depth_first_search(bracket, lambda node: node.match_id == match_id, _is_match, root)


def find_match_by_name(bracket, name: str, root: int = ROOT) -> Optional[Node]:
    """
    Earliest match the player won.

    The walk is post-order, so a quarterfinal is reached before the semifinal
    above it and the first hit is the lowest-round win.
    """
    return depth_first_search(
        bracket,
        lambda node: node.is_played and node.name == name,
        _is_match,
        root,
        postorder=True,
    )


def _in_subtree(index: int, root: int) -> bool:
    while index > root:
        index = parent(index)
    return index == root


def lowest_common_ancestor(bracket, a: Optional[Node], b: Optional[Node], root: int = ROOT) -> Optional[Node]:
    """
    Deepest node under ``root`` having both ``a`` and ``b`` in its subtree.

    When only one of them lies under ``root`` that node is returned; when
    neither does the result is None.
    """
    a_found = a is not None and _in_subtree(a.index, root)
    b_found = b is not None and _in_subtree(b.index, root)
    if not (a_found and b_found):
        if a_found:
            return a
        if b_found:
            return b
        return None

    i, j = a.index, b.index
    # Heap order: the larger index is never shallower, so climb it first.
    while i != j:
        if i > j:
            i = parent(i)
        else:
            j = parent(j)
    return bracket.node(i)


def height(node: Optional[Node]) -> int:
    """Players 0, quarterfinals 1, semifinals 2, final 3; -1 for no node."""
    if node is None:
        return -1
    return TOTAL_ROUNDS - depth(node.index)


def theoretical_ladder(bracket, name: str) -> List[int]:
    """Match ids the player has to win to take the title, first round first."""
    leaf = find_leaf_by_name(bracket, name)
    if leaf is None:
        return []
    ladder = []
    index = leaf.index
    while index != ROOT:
        index = parent(index)
        ladder.append(bracket.nodes[index].match_id)
    return ladder


def path_to_final(bracket, name: str) -> List[int]:
    """
    Match ids the player actually played, up to and including the first loss.

    Unknown players get an empty path. Matches without a result are skipped.
    """
    path = []
    for match_id in theoretical_ladder(bracket, name):
        match = find_match_by_id(bracket, match_id)
        if match is None or not match.is_played:
            continue
        path.append(match_id)
        if match.name != name:
            break
    return path


def would_meet(bracket, name1: str, name2: str) -> Tuple[int, int]:
    """
    (match_id, round) where the two players would meet if both kept winning.

    Returns NEVER_MEET when either player is unknown or both names are the same player.
    """
    leaf1 = find_leaf_by_name(bracket, name1)
    leaf2 = find_leaf_by_name(bracket, name2)
    if leaf1 is None or leaf2 is None:
        return NEVER_MEET

    meeting = lowest_common_ancestor(bracket, leaf1, leaf2)
    if meeting is None or meeting.is_leaf:
        return NEVER_MEET
    return meeting.match_id, height(meeting)


def total_score_by_name(bracket, name: str, root: int = ROOT) -> int:
    """Sum of winning scores over every match the player won; 0 if none."""
    return sum(
        node.score for node in iter_subtree(bracket, root)
        if _is_match(node) and node.name == name
    )
