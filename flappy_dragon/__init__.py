"""
Flappy Dragon
=============

A minimal side-scrolling arcade game: the dragon falls under gravity and
must flap through gapped walls, scoring a point for each one cleared.

All tunable parameters are in game_config.yaml.
"""
