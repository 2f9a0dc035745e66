"""
Nine Men's Morris core Python package.

Pure rule logic with no drawing or timing; a presentation layer receives
notifications and feeds input events back in.
Modules:
- topology.py: Position, Mill, adjacency and mill tables
- board.py: Owner, BoardState
- state.py: Phase, GameState
- rules.py: mill, capture and movement predicates
- engine.py: step() reducer and GameEngine
- notifier.py, events.py: the presentation boundary
- config.py, serialize.py, cli.py
"""
