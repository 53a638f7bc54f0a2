import argparse
import logging

from .controller import MatchController
from .settings import Settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sea Battle - you against the computer")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    subparsers = parser.add_subparsers(dest="mode", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--scores", type=str, default=None, help="High-score file")
    common.add_argument("--name", type=str, default=None, help="Name recorded with a high score")
    common.add_argument("--no-touching", action="store_true", help="Ships may not touch, even diagonally")

    gui_p = subparsers.add_parser("gui", parents=[common], help="Play in a window")
    gui_p.add_argument("--volume", type=float, default=None, help="Initial volume, 0.0 to 1.0")

    play_p = subparsers.add_parser("play", parents=[common], help="Play in the terminal")
    play_p.add_argument("--auto-deploy", action="store_true", help="Place your fleet at random")

    subparsers.add_parser("scores", parents=[common], help="Show the high-score table")
    return parser


def main(argv=None) -> None:
    args = build_parser().parse_args(argv)
    settings = Settings.from_args(args)
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.mode == "gui":
        from .gui import run_gui
        run_gui(settings)
    elif args.mode == "play":
        from .ui import run_terminal
        run_terminal(MatchController(settings), auto_deploy=args.auto_deploy)
    elif args.mode == "scores":
        from .ui import print_scores
        print_scores(MatchController(settings))


if __name__ == "__main__":
    main()
