"""Algorithms module - Contains path finding and Hamiltonian cycle algorithms for Snake"""
from .hamilton_cycle import (CycleOrder, is_hamiltonian_cycle, make_zig_zag_cycle, random_hamiltonian_cycle,
                             repair_cycle, visualize_cycle)
from .lookahead import Lookahead, Unreachables
from .shortest_path import astar_shortest_path, bfs_shortest_path, flood_fill, shortest_path

__all__ = [
    'CycleOrder', 'Lookahead', 'Unreachables', 'astar_shortest_path', 'bfs_shortest_path', 'flood_fill',
    'is_hamiltonian_cycle', 'make_zig_zag_cycle', 'random_hamiltonian_cycle', 'repair_cycle',
    'shortest_path', 'visualize_cycle',
]
