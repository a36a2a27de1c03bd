# Entry point: simulate one bracket and print it with a few example queries

import argparse
import logging
import os
import sys

import yaml

from knockout.bracket import run_tournament
from knockout.display import format_bracket, format_play_by_play
from knockout.models import DEFAULT_ROSTER
from knockout.queries import NEVER_MEET
from knockout.randomness import RandomSource

logger = logging.getLogger(__name__)

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATA_DIR = os.environ.get('BRACKET_DATA_DIR', os.path.join(BASE_DIR, 'data'))
ROSTER_FILE = os.path.join(DATA_DIR, 'players.yaml')


def load_roster(file_path):
    """
    Load player names from YAML: either a ``players:`` list or a bare list.

    A missing or unreadable file falls back to the default roster.
    """
    if not os.path.exists(file_path):
        return list(DEFAULT_ROSTER)
    try:
        with open(file_path, mode='r', encoding='utf-8') as file:
            data = yaml.safe_load(file)
    except yaml.YAMLError as e:
        logger.warning(f'Failed to parse {file_path}: {e}')
        return list(DEFAULT_ROSTER)

    if isinstance(data, dict):
        data = data.get('players')
    if not isinstance(data, list):
        logger.warning(f'No player list in {file_path}, using default roster')
        return list(DEFAULT_ROSTER)
    return data


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Simulate an 8-player single elimination bracket.')
    parser.add_argument('--roster', default=ROSTER_FILE, help='YAML file with the 8 player names')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for a reproducible run')
    parser.add_argument('--player', default='Alice', help='Player to report on')
    parser.add_argument('--opponent', default='Grace', help='Opponent for the would-meet query')
    parser.add_argument('--verbose', action='store_true', help='Log seeding and every match')
    return parser.parse_args(argv)


def report(bracket, player, opponent):
    """Lines describing the player's run, their meeting with the opponent and the champion."""
    lines = []
    path = bracket.path_to_final(player)
    if path:
        lines.append(f"Path to final for {player} (stop at first loss): "
                     + " -> ".join(f"Match {match_id}" for match_id in path))
    else:
        lines.append(f"Path to final for {player}: (no matches or player not found)")

    meeting = bracket.would_meet(player, opponent)
    if meeting != NEVER_MEET:
        match_id, round_num = meeting
        lines.append(f"{player} and {opponent} would meet at match {match_id} "
                     f"in round {round_num} (if both keep winning).")
    else:
        lines.append(f"{player} and {opponent} would never meet in this bracket.")

    lines.append(f"Total score for {player} (matches won): {bracket.total_score_by_name(player)}")

    first_win = bracket.find_match_by_name(player)
    if first_win is not None:
        lines.append(f"First match {player} won: match {first_win.match_id} with score {first_win.score}")
    else:
        lines.append(f"{player} did not win any match.")

    lines.append(f"Champion: {bracket.root.name} with score {bracket.root.score}")
    return lines


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    roster = load_roster(args.roster)
    try:
        bracket = run_tournament(roster, RandomSource(args.seed))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("\n".join(format_play_by_play(bracket)))
    print()
    print("\n".join(format_bracket(bracket)))
    print()
    print("\n".join(report(bracket, args.player, args.opponent)))
    return 0


if __name__ == '__main__':
    sys.exit(main())
