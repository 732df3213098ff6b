"""
Snake AI - Main Entry Point
Hamiltonian cycle agents that play Snake until the board is full

Examples:
  python main.py play --agent cell-tree          # Play one game in the terminal
  python main.py watch --agent dhcr --speed 20   # Watch an agent play (pygame window)
  python main.py stats --games 200 --plot out.png
  python main.py export --output game.json       # Save a replayable JSON trace
  python main.py cycle --width 6 --height 4      # Print a random Hamiltonian cycle
"""

import argparse
import logging
import sys

from agents import AGENTS, AgentLog, make_agent
from algorithms.hamilton_cycle import make_zig_zag_cycle, random_hamiltonian_cycle, visualize_cycle
from game.game import Game
from game.grid import CoordRange
from game.rng import as_rng
from game.simulation import play
from game.trace import Trace

logger = logging.getLogger(__name__)


def print_banner(title):
    """Print a section banner"""
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)


def play_game(args):
    """Play one game without graphics and print the final board"""
    dims = CoordRange(args.width, args.height)
    rng = as_rng(args.seed)
    agent = make_agent(args.agent, dims, rng.next_rng())
    game = Game(dims, rng)

    print_banner(f"Agent '{args.agent}' on a {args.width}x{args.height} board")

    def show(g):
        if args.show_every and g.turn % args.show_every == 0:
            print(f"\nTurn {g.turn} | Length: {len(g.snake)}")
            print(g)

    play(game, agent, on_turn=show)
    print("\nFinal board:")
    print(game)
    print(f"\nResult: {'WIN' if game.win else 'LOSS'} | Length: {len(game.snake)} | Turns: {game.turn}")
    print("=" * 60 + "\n")
    return 0 if game.win else 1


def watch_games(args):
    """Open the pygame viewer"""
    from demos.watch import watch
    watch(agent_name=args.agent, width=args.width, height=args.height, num_games=args.games,
          seed=args.seed, speed_cells=args.speed)
    return 0


def run_stats(args):
    """Play many games and print statistics"""
    from demos.benchmark import benchmark
    stats = benchmark(agent_name=args.agent, width=args.width, height=args.height, num_games=args.games,
                      seed=args.seed, workers=args.workers, plot_path=args.plot)
    return 0 if stats.collisions == 0 else 1


def export_trace(args):
    """Play one game and save it as JSON"""
    dims = CoordRange(args.width, args.height)
    rng = as_rng(args.seed)
    agent = make_agent(args.agent, dims, rng.next_rng())
    game = Game(dims, rng)
    log = AgentLog()
    trace = Trace()
    play(game, agent, log, on_turn=trace.record)
    trace.save(args.output, agent.name, log)
    print(f"Game of {game.turn} turns ({'WIN' if game.win else 'LOSS'}) saved to: {args.output}")
    return 0


def show_cycle(args):
    """Print a Hamiltonian cycle with the visiting order of every cell"""
    dims = CoordRange(args.width, args.height)
    if args.zig_zag:
        cycle = make_zig_zag_cycle(dims)
    else:
        cycle = random_hamiltonian_cycle(dims, as_rng(args.seed))
    visualize_cycle(cycle)
    return 0


def parse_args(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description='Snake AI with Hamiltonian cycle agents',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--agent', choices=sorted(AGENTS), default='cell-tree',
                        help='Agent to play with (default: cell-tree)')
    common.add_argument('--width', type=int, default=10, help='Width of the board (default: 10)')
    common.add_argument('--height', type=int, default=10, help='Height of the board (default: 10)')
    common.add_argument('--seed', type=int, default=None, help='Random seed (default: random)')
    common.add_argument('-v', '--verbose', action='store_true', help='Show debug logging')

    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('play', parents=[common], help='Play one game in the terminal')
    p.add_argument('--show-every', type=int, default=0,
                   help='Print the board every N turns (default: 0, only the final board)')
    p.set_defaults(func=play_game)

    p = sub.add_parser('watch', parents=[common], help='Watch an agent play in a pygame window')
    p.add_argument('--games', type=int, default=1, help='Number of games to watch (default: 1)')
    p.add_argument('--speed', type=int, default=8, help='Speed in cells/sec (default: 8)')
    p.set_defaults(func=watch_games)

    p = sub.add_parser('stats', parents=[common], help='Play many games and print statistics')
    p.add_argument('--games', type=int, default=100, help='Number of games (default: 100)')
    p.add_argument('--workers', type=int, default=None, help='Worker threads (default: automatic)')
    p.add_argument('--plot', type=str, default=None, help='Save a histogram of turns per game here')
    p.set_defaults(func=run_stats)

    p = sub.add_parser('export', parents=[common], help='Play one game and save a JSON trace')
    p.add_argument('--output', type=str, default='game.json', help='Output path (default: game.json)')
    p.set_defaults(func=export_trace)

    p = sub.add_parser('cycle', parents=[common], help='Print a Hamiltonian cycle')
    p.add_argument('--zig-zag', action='store_true', help='Print the zig-zag cycle instead of a random one')
    p.set_defaults(func=show_cycle)

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    try:
        return args.func(args)
    except ValueError as e:
        print(f"❌ Error: {e}")
        return 2


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\n👋 Interrupted by user. Goodbye!\n")
        sys.exit(0)
