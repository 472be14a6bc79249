"""Capacity planning — how many players go on each court this round.

Doubles (4 per court) is always preferred. Courts that cannot be filled
with four take three (2v1) or two (singles); a single leftover player joins
the last allocated court to make a 3v2 game rather than sit out alone.
"""

from __future__ import annotations

MAX_PLAYERS_PER_COURT = 4
MAX_RECOMMENDED_COURTS = 3


def plan_distribution(playable_count: int, courts: int) -> list[int]:
    """Split ``playable_count`` players over at most ``courts`` courts.

    Args:
        playable_count: Players available to play this round.
        courts: Courts available.

    Returns:
        Court sizes in fill order, each in {2, 3, 4, 5}. Courts that would
        be empty are dropped, so the list may be shorter than ``courts``.
        Empty when fewer than 2 players or no courts.
    """
    if playable_count < 2 or courts < 1:
        return []

    distribution = [0] * courts
    remaining = playable_count

    court_index = 0
    while remaining >= MAX_PLAYERS_PER_COURT and court_index < courts:
        distribution[court_index] = MAX_PLAYERS_PER_COURT
        remaining -= MAX_PLAYERS_PER_COURT
        court_index += 1

    for i in range(courts):
        if distribution[i]:
            continue
        if remaining >= 3:
            distribution[i] = 3
            remaining -= 3
        elif remaining >= 2:
            distribution[i] = 2
            remaining -= 2

    if remaining == 1:
        allocated = [i for i, size in enumerate(distribution) if size > 0]
        if allocated:
            distribution[allocated[-1]] += 1

    return [size for size in distribution if size > 0]


def playable_count(roster_size: int, rackets: int, courts: int) -> int:
    """Players who can be put on court this round.

    Capped by roster, rackets and doubles capacity; raised to two per court
    when the roster is large enough to cover every court with singles. A
    single spare player who has a racket is counted in, so they play as a
    fifth on a court rather than rest alone.
    """
    count = min(roster_size, rackets, courts * MAX_PLAYERS_PER_COURT)
    if roster_size - count == 1 and rackets > count:
        count += 1
    minimum = courts * 2
    if count < minimum and roster_size >= minimum:
        count = minimum
    return count


def recommended_courts(roster_size: int, rackets: int) -> int:
    """Suggested number of courts for a roster and racket count.

    Sized for at least three players (a 2v1 game) per court, capped at three
    courts, with floors of two courts from seven players and three courts
    from eleven.
    """
    if roster_size < 3:
        return 0

    courts = min(MAX_RECOMMENDED_COURTS, roster_size // 3, rackets // 3)

    if roster_size >= 7 and rackets >= 7:
        courts = max(2, courts)
    if roster_size >= 11 and rackets >= 11:
        courts = max(3, courts)

    return courts
