"""Configuration package for the fish game.

Display constants live in ``display``, gameplay tunables in ``gameplay``,
and the runtime ``GameConfig`` dataclass in ``game_config``.
"""
