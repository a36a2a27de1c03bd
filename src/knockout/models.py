DEFAULT_ROSTER = ["Alice", "Bob", "Carol", "David", "Eva", "Frank", "Grace", "Henry"]


class Node:
    """A bracket node: a player leaf (match_id 0) or a match between two children."""

    def __init__(self, index, match_id=0, name="", score=0):
        self.index = index
        self.match_id = match_id
        self.name = name
        self.score = score

    @property
    def is_leaf(self):
        return self.match_id == 0

    @property
    def is_played(self):
        return not self.is_leaf and self.score > 0

    def __repr__(self):
        return f"Node(index={self.index}, match_id={self.match_id}, name={self.name}, score={self.score})"


class MatchResult:
    def __init__(self, label, match_id, left, right, left_score, right_score, winner, score):
        self.label = label
        self.match_id = match_id
        self.left = left
        self.right = right
        self.left_score = left_score
        self.right_score = right_score
        self.winner = winner
        self.score = score

    def to_dict(self):
        return {
            'label': self.label,
            'match_id': self.match_id,
            'players': [self.left, self.right],
            'scores': [self.left_score, self.right_score],
            'winner': self.winner,
            'score': self.score,
        }

    def __repr__(self):
        return (f"MatchResult(label={self.label}, {self.left} ({self.left_score}) vs "
                f"{self.right} ({self.right_score}), winner={self.winner})")


# Arena layout: a complete binary tree of 15 nodes in heap order.
# Index 0 is the final, 1-2 the semifinals, 3-6 the quarterfinals, 7-14 the players.
ROOT = 0
NODE_COUNT = 15
FIRST_LEAF = 7
LEAF_COUNT = NODE_COUNT - FIRST_LEAF
TOTAL_ROUNDS = 3

# index -> (match_id, label)
MATCH_LAYOUT = {
    0: (7, "FINAL"),
    1: (5, "SF1"),
    2: (6, "SF2"),
    3: (1, "QF1"),
    4: (2, "QF2"),
    5: (3, "QF3"),
    6: (4, "QF4"),
}


def left_child(index):
    return 2 * index + 1


def right_child(index):
    return 2 * index + 2


def parent(index):
    return (index - 1) // 2


def is_leaf_index(index):
    return FIRST_LEAF <= index < NODE_COUNT


def depth(index):
    """Distance from the root: final 0, semifinals 1, quarterfinals 2, players 3."""
    return (index + 1).bit_length() - 1
