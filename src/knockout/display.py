"""
Read-only views of a bracket for the console and the web UI.
"""
from typing import Dict, List

from knockout.models import TOTAL_ROUNDS
from knockout.queries import height, iter_subtree


def get_round_name(teams_in_round: int) -> str:
    """Get the name of a round based on number of players still in it."""
    if teams_in_round == 2:
        return "Final"
    elif teams_in_round == 4:
        return "Semifinal"
    elif teams_in_round == 8:
        return "Quarterfinal"
    else:
        return f"Round of {teams_in_round}"


def round_name(round_num: int) -> str:
    """Round 1 is played by 8 players, round 3 by 2."""
    return get_round_name(2 ** (TOTAL_ROUNDS - round_num + 1))


def players(bracket) -> List[str]:
    """Player names in bracket order, left to right."""
    return [node.name for node in iter_subtree(bracket) if node.is_leaf]


def match_display(bracket, match) -> Dict:
    left, right = bracket.children(match)
    return {
        'match_id': match.match_id,
        'label': bracket.label(match),
        'players': [left.name, right.name],
        'winner': match.name if match.is_played else None,
        'score': match.score,
    }


def matches_at_round(bracket, round_num: int) -> List[Dict]:
    """Every match whose height equals ``round_num``, left to right."""
    return [
        match_display(bracket, node)
        for node in iter_subtree(bracket)
        if not node.is_leaf and height(node) == round_num
    ]


def get_bracket_display(bracket) -> Dict:
    """
    Get bracket data formatted for UI display.

    Rounds are keyed by name (Quarterfinal, Semifinal, Final) in playing order.
    The champion is None until the final has been played.
    """
    rounds = {}
    for round_num in range(1, TOTAL_ROUNDS + 1):
        rounds[round_name(round_num)] = matches_at_round(bracket, round_num)

    root = bracket.root
    return {
        'players': players(bracket),
        'rounds': rounds,
        'total_rounds': TOTAL_ROUNDS,
        'champion': root.name if root.is_played else None,
        'champion_score': root.score,
        'results': [result.to_dict() for result in bracket.results],
    }


def format_bracket(bracket) -> List[str]:
    """Text rendering of the whole bracket: players first, then each round."""
    lines = ["=== ROUND 0: PLAYERS ==="]
    lines.extend(f"  Player: {name}" for name in players(bracket))

    for round_num in range(1, TOTAL_ROUNDS + 1):
        lines.append("")
        if round_num == TOTAL_ROUNDS:
            lines.append(f"=== FINAL (ROUND {round_num}) ===")
        else:
            lines.append(f"=== ROUND {round_num}: {round_name(round_num).upper()}S ===")
        for match in matches_at_round(bracket, round_num):
            winner = match['winner'] if match['winner'] is not None else "?"
            lines.append(
                f"  Match {match['match_id']}: {match['players'][0]} vs {match['players'][1]}"
                f" -> winner: {winner} (score {match['score']})"
            )
    return lines


def format_play_by_play(bracket) -> List[str]:
    """
    Seeding order and every played match with both scores, in playing order.

    A new round header is written whenever the round of the next result changes.
    """
    lines = ["Random player order:"]
    lines.extend(f"  {name}" for name in players(bracket))

    current_round = None
    for result in bracket.results:
        round_num = height(bracket.find_match_by_id(result.match_id))
        if round_num != current_round:
            current_round = round_num
            lines.append("")
            lines.append(f"=== {round_name(round_num).upper()} ===")
        lines.append(f"{result.label}: {result.left} ({result.left_score}) vs "
                     f"{result.right} ({result.right_score})")
        lines.append(f"  Winner: {result.winner} (score {result.score})")
    return lines
