"""
Packet Router Package
=====================

Arcade game where a router slides along the bottom of the playfield catching
falling packets while dodging viruses.

- router_core: headless simulation (spawning, motion, collisions, scoring)
  plus snapshot and rendering helpers

All tunable parameters are in game_config.yaml.
"""
