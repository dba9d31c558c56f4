"""
Stock Room planner entry point.

    python main.py plan   [--config config/config.yaml]
    python main.py advise [--config config/config.yaml]
"""

import argparse

from stockroom.pipelines.run_planning import run_planning
from stockroom.llm05.advice_cli import run_cli


def main():

    parser = argparse.ArgumentParser(description="Stock Room merchandise planner")
    parser.add_argument(
        "command",
        choices=["plan", "advise"],
        help="plan: compute the dashboard; advise: start a mentor session",
    )
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="Path to the YAML configuration file",
    )

    args = parser.parse_args()

    if args.command == "plan":
        run_planning(args.config)
    else:
        run_cli(args.config)


if __name__ == "__main__":
    main()
