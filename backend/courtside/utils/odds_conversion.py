from typing import Tuple


def decimal_to_implied_probability(decimal_odds: float) -> float:
    """
    Convert decimal (European) odds to implied probability.

    Args:
        decimal_odds: Decimal odds (e.g., 1.50 or 2.75)

    Returns:
        Float probability between 0 and 1 (still includes the bookmaker margin)
    """
    if decimal_odds is None or decimal_odds <= 0:
        raise ValueError(f"Decimal odds must be positive, got {decimal_odds}")
    return 1 / decimal_odds


def devig_two_way(player1_odds: float, player2_odds: float) -> Tuple[float, float]:
    """
    Remove the overround from a two-way market by normalizing the pair.

    Returns:
        Tuple of (player1_probability, player2_probability) summing to 1
    """
    implied1 = decimal_to_implied_probability(player1_odds)
    implied2 = decimal_to_implied_probability(player2_odds)
    total = implied1 + implied2
    return implied1 / total, implied2 / total
