"""
Single elimination bracket construction and simulation.

The bracket is a fixed 8-player, 3-round complete binary tree stored as a flat
arena of nodes (see ``knockout.models`` for the index layout). Matches are
played bottom-up: quarterfinals, then semifinals, then the final.
"""
import logging
from typing import List, Optional, Tuple

from knockout.models import (
    DEFAULT_ROSTER, FIRST_LEAF, LEAF_COUNT, MATCH_LAYOUT, NODE_COUNT, ROOT, TOTAL_ROUNDS,
    MatchResult, Node, is_leaf_index, left_child, right_child,
)
from knockout.randomness import RandomSource
from knockout import queries

logger = logging.getLogger(__name__)

SCORE_MIN = 1
SCORE_MAX = 10

# Arena indices of the matches in each round, left to right.
ROUND_INDICES = {
    1: [3, 4, 5, 6],
    2: [1, 2],
    3: [0],
}


def _validate_roster(roster: List[str]) -> None:
    if len(roster) != LEAF_COUNT:
        raise ValueError(f"Bracket needs exactly {LEAF_COUNT} players, got {len(roster)}")
    for name in roster:
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Invalid player name: {name!r}")
    if len(set(roster)) != len(roster):
        duplicates = sorted({name for name in roster if roster.count(name) > 1})
        raise ValueError(f"Duplicate player names: {', '.join(duplicates)}")


class Bracket:
    """
    Complete single elimination bracket.

    Use ``Bracket.build`` to seed a new bracket, then ``simulate`` (or
    ``play_round`` for each round in order) before running queries.
    """

    def __init__(self, nodes: List[Node]):
        if len(nodes) != NODE_COUNT:
            raise ValueError(f"Bracket arena needs {NODE_COUNT} nodes, got {len(nodes)}")
        self.nodes = nodes
        # Every played match, in playing order.
        self.results = []

    @classmethod
    def build(cls, roster: Optional[List[str]] = None, rng: Optional[RandomSource] = None) -> "Bracket":
        """
        Create the match skeleton and seed a shuffled copy of the roster into the leaves.

        Leaves are filled left to right: QF1.left, QF1.right, QF2.left, ... QF4.right.
        Raises ValueError when the roster is not 8 unique, non-empty names.
        """
        names = list(roster if roster is not None else DEFAULT_ROSTER)
        _validate_roster(names)
        if rng is None:
            rng = RandomSource()

        nodes = []
        for index in range(FIRST_LEAF):
            match_id, label = MATCH_LAYOUT[index]
            nodes.append(Node(index, match_id=match_id, name=f"{label} TBD"))

        rng.shuffle(names)
        logger.info(f"Random player order: {', '.join(names)}")

        for offset, name in enumerate(names):
            nodes.append(Node(FIRST_LEAF + offset, name=name))

        return cls(nodes)

    @property
    def root(self) -> Node:
        return self.nodes[ROOT]

    def node(self, index: int) -> Optional[Node]:
        if 0 <= index < NODE_COUNT:
            return self.nodes[index]
        return None

    def children(self, node: Node) -> Tuple[Optional[Node], Optional[Node]]:
        """Left and right child of a node; (None, None) for a leaf."""
        if is_leaf_index(node.index):
            return None, None
        return self.nodes[left_child(node.index)], self.nodes[right_child(node.index)]

    def leaves(self) -> List[Node]:
        return self.nodes[FIRST_LEAF:]

    def matches(self) -> List[Node]:
        return self.nodes[:FIRST_LEAF]

    def label(self, node: Node) -> str:
        return MATCH_LAYOUT[node.index][1]

    @property
    def is_complete(self) -> bool:
        return all(match.is_played for match in self.matches())

    def play_match(self, index: int, rng: RandomSource) -> MatchResult:
        """
        Play the match at ``index``: draw left then right score in [SCORE_MIN, SCORE_MAX].

        Left wins ties. Raises RuntimeError when the match was already played or
        one of its children is an unplayed match.
        """
        match = self.node(index)
        if match is None or match.is_leaf:
            raise ValueError(f"No match at arena index {index}")
        if match.is_played:
            raise RuntimeError(f"Match {match.match_id} has already been played")

        left, right = self.children(match)
        for child in (left, right):
            if not child.is_leaf and not child.is_played:
                raise RuntimeError(
                    f"Match {match.match_id} cannot be played before match {child.match_id}"
                )

        left_score = rng.randint(SCORE_MIN, SCORE_MAX)
        right_score = rng.randint(SCORE_MIN, SCORE_MAX)
        logger.debug(f"{self.label(match)} draws: {left_score}, {right_score}")

        if left_score >= right_score:
            match.name, match.score = left.name, left_score
        else:
            match.name, match.score = right.name, right_score

        result = MatchResult(
            label=self.label(match),
            match_id=match.match_id,
            left=left.name,
            right=right.name,
            left_score=left_score,
            right_score=right_score,
            winner=match.name,
            score=match.score,
        )
        logger.info(f"{result.label}: {left.name} ({left_score}) vs {right.name} ({right_score}) "
                    f"-> winner: {match.name} (score {match.score})")
        self.results.append(result)
        return result

    def play_round(self, round_num: int, rng: RandomSource) -> List[MatchResult]:
        """Play every match of a round (1 = quarterfinals, 2 = semifinals, 3 = final)."""
        if round_num not in ROUND_INDICES:
            raise ValueError(f"Round must be between 1 and {TOTAL_ROUNDS}, got {round_num}")
        return [self.play_match(index, rng) for index in ROUND_INDICES[round_num]]

    def simulate(self, rng: RandomSource) -> List[MatchResult]:
        """Play all rounds in order and return every match result."""
        results = []
        for round_num in range(1, TOTAL_ROUNDS + 1):
            results.extend(self.play_round(round_num, rng))
        logger.info(f"Champion: {self.root.name} with score {self.root.score}")
        return results

    # Queries over the completed bracket

    def find_leaf_by_name(self, name: str) -> Optional[Node]:
        return queries.find_leaf_by_name(self, name)

    def find_match_by_id(self, match_id: int) -> Optional[Node]:
        return queries.find_match_by_id(self, match_id)

    def find_match_by_name(self, name: str) -> Optional[Node]:
        return queries.find_match_by_name(self, name)

    def path_to_final(self, name: str) -> List[int]:
        return queries.path_to_final(self, name)

    def would_meet(self, name1: str, name2: str) -> Tuple[int, int]:
        return queries.would_meet(self, name1, name2)

    def total_score_by_name(self, name: str) -> int:
        return queries.total_score_by_name(self, name)

    def __repr__(self):
        return f"Bracket(players={[leaf.name for leaf in self.leaves()]}, champion={self.root.name})"


def build_tournament(roster: Optional[List[str]] = None, rng: Optional[RandomSource] = None) -> Bracket:
    """Seed a new, unplayed bracket."""
    return Bracket.build(roster, rng)


def run_tournament(roster: Optional[List[str]] = None, rng: Optional[RandomSource] = None) -> Bracket:
    """Seed a bracket and play all three rounds with the same random source."""
    if rng is None:
        rng = RandomSource()
    bracket = Bracket.build(roster, rng)
    bracket.simulate(rng)
    return bracket
