"""Agents module - Contains the policies that play Snake"""
from __future__ import annotations
from typing import Callable, Dict

from algorithms.hamilton_cycle import random_hamiltonian_cycle
from game.grid import RangeLike, as_range
from game.rng import RNG, SeedLike, as_rng
from .base import NO_ENTRY, SAME_ENTRY, Agent, AgentLog, LogKey
from .cell_tree_agent import CellTreeAgent, CellTreeConfig, DetourStrategy
from .dhcr import DynamicHamiltonianCycleRepairAgent, RepairConfig
from .fixed import CutAgent, FixedCycleAgent, ZigZagAgent
from .perturbed import PerturbedHamiltonianCycleAgent

AgentFactory = Callable[[RangeLike, RNG], Agent]


def _cell_tree_agent(dims, rng) -> CellTreeAgent:
    if dims.w % 2 or dims.h % 2:
        raise ValueError(f"the cell tree agent needs even board dimensions, got {dims.w}x{dims.h}")
    return CellTreeAgent()


def _zig_zag_agent(dims, rng) -> ZigZagAgent:
    if dims.w % 2:
        raise ValueError(f"the zig-zag agent needs an even board width, got {dims.w}x{dims.h}")
    return ZigZagAgent()


def _cut_agent(dims, rng) -> CutAgent:
    if dims.w % 2 or dims.h % 2:
        raise ValueError(f"the cut agent needs even board dimensions, got {dims.w}x{dims.h}")
    return CutAgent()


# The closed roster of agents, by name
AGENTS: Dict[str, AgentFactory] = {
    ZigZagAgent.name: _zig_zag_agent,
    CutAgent.name: _cut_agent,
    FixedCycleAgent.name: lambda dims, rng: FixedCycleAgent(random_hamiltonian_cycle(dims, rng)),
    CellTreeAgent.name: _cell_tree_agent,
    PerturbedHamiltonianCycleAgent.name: lambda dims, rng: PerturbedHamiltonianCycleAgent.random(dims, rng),
    DynamicHamiltonianCycleRepairAgent.name: lambda dims, rng: DynamicHamiltonianCycleRepairAgent.random(dims, rng),
}


def make_agent(name: str, dims: RangeLike, rng: SeedLike = None) -> Agent:
    """
    Create a fresh agent for one round.

    Args:
        name: key of AGENTS
        dims: board size the agent will play on
        rng: randomness for agents that draw a random cycle

    Returns:
        Agent
    """
    try:
        factory = AGENTS[name]
    except KeyError:
        raise ValueError(f"unknown agent {name!r}, choose from {', '.join(AGENTS)}") from None
    return factory(as_range(dims), as_rng(rng))


__all__ = [
    'AGENTS', 'Agent', 'AgentLog', 'CellTreeAgent', 'CellTreeConfig', 'CutAgent', 'DetourStrategy',
    'DynamicHamiltonianCycleRepairAgent', 'FixedCycleAgent', 'LogKey', 'NO_ENTRY',
    'PerturbedHamiltonianCycleAgent', 'RepairConfig', 'SAME_ENTRY', 'ZigZagAgent', 'make_agent',
]
