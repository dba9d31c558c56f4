# src/stockroom/llm05/advice_cli.py

"""
Advice CLI Interface
====================

Interactive mentor session over the current inventory.

Responsibilities:
-----------------
- Session-scoped advice requests
- Shop health check, action-item coaching, supplier emails,
  marketing copy and free-form questions
- Markdown transcript of every reply under the session directory

Design Principles:
------------------
- Each CLI launch = new session
- Figures are computed once per session from one snapshot
- Advice failures never stop the session
"""

import os
from typing import Callable, Dict, List, Optional, Tuple

from stockroom.catalog02.inventory_store import InventoryStore
from stockroom.ingestion01.inventory_loader import load_inventory_store
from stockroom.inventory04.action_items import ActionItem
from stockroom.llm05.advice_client import generate_advice
from stockroom.llm05.prompt_builder import (
    build_action_prompt,
    build_health_check_prompt,
    build_marketing_prompt,
    build_product_context,
    build_shop_context,
    category_breakdown,
)
from stockroom.pipelines.run_planning import compute_dashboard
from stockroom.utils.config_loader import load_config
from stockroom.utils.helpers import ensure_directory, generate_timestamp
from stockroom.utils.logger import get_logger


Advisor = Callable[..., str]


class AdviceSession:
    """
    One mentor session bound to a single inventory snapshot.
    """

    def __init__(
        self,
        config: Dict,
        store: InventoryStore,
        advisor: Advisor = generate_advice,
        session_id: Optional[str] = None,
    ):

        self.config = config
        self.logger = get_logger(config)
        self.advisor = advisor

        self.session_id = session_id or f"SESSION_{generate_timestamp('%Y%m%d_%H%M%S')}"
        self.session_dir = os.path.join(
            config["paths"]["output"]["advice"], self.session_id
        )
        ensure_directory(self.session_dir)

        self.products = store.snapshot()
        self.results = compute_dashboard(self.products, config)
        self.reply_counter = 0

    # =========================================================
    # INTERNAL METHODS
    # =========================================================

    @property
    def actions(self) -> List[ActionItem]:
        return self.results["actions"]

    def _ask(self, title: str, prompt: str, context: Dict) -> str:

        reply = self.advisor(prompt, context, config=self.config)

        self.reply_counter += 1
        path = os.path.join(
            self.session_dir, f"ADV_{self.reply_counter:03d}.md"
        )

        with open(path, "w", encoding="utf-8") as f:
            f.write(f"# {title}\n\n")
            f.write(f"Session: {self.session_id}\n\n")
            f.write(f"## Prompt\n\n{prompt}\n\n")
            f.write(f"## Advice\n\n{reply}\n")

        self.logger.info(f"Advice '{title}' saved to {path}")

        return reply

    # =========================================================
    # PUBLIC METHODS
    # =========================================================

    def health_check(self) -> str:

        max_items = self.config["llm"]["max_context_items"]
        cap = self.config["planning"]["cover_display_cap_weeks"]
        breakdown = category_breakdown(self.results["categories"], cap)[:max_items]

        return self._ask(
            "Shop Health Check",
            build_health_check_prompt(self.results["summary"], breakdown, cap),
            build_shop_context(
                self.results["summary"],
                self.results["categories"],
                self.results["budget"],
                max_categories=max_items,
                cap=cap,
            ),
        )

    def advise_action(self, number: int) -> Tuple[str, str]:
        """Advice for the 1-based action number shown by ``actions``."""

        if not 1 <= number <= len(self.actions):
            raise IndexError(f"No action item number {number}.")

        action = self.actions[number - 1]
        title, prompt = build_action_prompt(action)

        return title, self._ask(title, prompt, build_product_context(action.product))

    def marketing_copy(self, product_id: int) -> str:

        product = next((p for p in self.products if p.id == product_id), None)

        if product is None:
            raise KeyError(f"Product id {product_id} not found.")

        return self._ask(
            f"Marketing Magic: {product.name}",
            build_marketing_prompt(product),
            build_product_context(product),
        )

    def ask(self, question: str) -> str:
        return self._ask("Question", question, {})


# =========================================================
# CLI ENTRY POINT
# =========================================================

def run_cli(config_path: str = "config/config.yaml") -> None:

    config = load_config(config_path)
    logger = get_logger(config)

    session = AdviceSession(config, load_inventory_store(config))

    logger.info(f"Advice CLI started. Session: {session.session_id}")

    print("\nStock Room Mentor")
    print("-----------------")
    print(f"Session ID: {session.session_id}")
    _print_help(session.session_dir)

    while True:

        user_input = input(">> ").strip()

        if not user_input:
            continue

        command, _, argument = user_input.partition(" ")
        command = command.lower()
        argument = argument.strip()

        if command == "exit":
            logger.info("Exiting advice session.")
            print("\nSession closed.")
            break

        if command == "help":
            _print_help(session.session_dir)
            continue

        if command == "actions":
            _print_actions(session.actions)
            continue

        try:
            if command == "health":
                reply = session.health_check()

            elif command == "advise":
                title, reply = session.advise_action(int(argument))
                print(f"\n{title}")

            elif command == "market":
                reply = session.marketing_copy(int(argument))

            elif command == "ask":
                reply = session.ask(argument)

            else:
                print(f"Unknown command '{command}'. Type 'help'.\n")
                continue

        except (ValueError, IndexError, KeyError) as e:
            logger.warning(f"Command rejected: {e}")
            print(f"Unable to answer: {e}\n")
            continue

        print(f"\n{reply}\n")


# =========================================================
# HELP
# =========================================================

def _print_help(session_dir: str) -> None:

    print("\nCommands:")
    print("---------")
    print("health               → Shop health check")
    print("actions              → List this week's action items")
    print("advise <n>           → Coaching (or supplier email) for action n")
    print("market <product_id>  → Instagram caption and shelf talker")
    print("ask <question>       → Ask the mentor anything")
    print("help")
    print("exit\n")
    print("Replies are saved under:")
    print(session_dir)
    print()


# =========================================================
# ACTIONS
# =========================================================

def _print_actions(actions: List[ActionItem]) -> None:

    if not actions:
        print("All clear! Your stock looks healthy this week.\n")
        return

    print("\nMy Weekly Focus")
    print("---------------")

    for number, action in enumerate(actions, start=1):
        print(f"{number}. [{action.severity.upper()}] {action.title}")
        print(f"   {action.description}")

    print()
