from courtside.utils.odds_conversion import decimal_to_implied_probability, devig_two_way
from courtside.utils.aliases import create_player_slug, generate_player_aliases

__all__ = [
    "decimal_to_implied_probability",
    "devig_two_way",
    "create_player_slug",
    "generate_player_aliases",
]
