# src/stockroom/pipelines/run_planning.py

"""
Planning Pipeline Orchestrator
==============================

Converts the session inventory into:

1. Shop summary (cash in stock, sales, weeks of stock, margin)
2. Category breakdown with WSSI projection
3. Item-level WSSI / open-to-buy plan
4. Whole-shop buying budget
5. Weekly focus action items
6. Optional category chart
7. Optional health-check narrative from the advice client

Design Principles:
------------------
- Config-driven
- Logger only (no print statements)
- One immutable snapshot per run
- Advice requested only after every figure is computed
"""

import os
from typing import Any, Dict, Iterable

import pandas as pd
from tabulate import tabulate

from stockroom.catalog02.product import Product
from stockroom.ingestion01.csv_export import write_inventory_csv
from stockroom.ingestion01.inventory_loader import load_inventory_store
from stockroom.inventory04.action_items import classify_actions, actions_to_frame
from stockroom.inventory04.wssi_planning import (
    buying_budget,
    format_cover_weeks,
    plan_categories,
    plan_products,
    summarize_shop,
)
from stockroom.llm05.advice_client import generate_advice
from stockroom.llm05.prompt_builder import (
    build_health_check_prompt,
    build_shop_context,
    category_breakdown,
)
from stockroom.utils.config_loader import load_config
from stockroom.utils.helpers import ensure_directory, generate_timestamp
from stockroom.utils.logger import get_logger
from stockroom.visualization06.category_plots import plot_category_stock_vs_target


# ==========================================================
# Calculation Pass
# ==========================================================

def planning_options(config: Dict) -> Dict[str, float]:
    """Keyword arguments for the planning functions, from config.planning."""

    planning_cfg = config["planning"]

    return {
        "weeks_per_month": planning_cfg["weeks_per_month"],
        "forecast_weeks": planning_cfg["forecast_weeks"],
        "vat_divisor": planning_cfg["vat_divisor"],
        "overstock_factor": planning_cfg["overstock_factor"],
        "understock_factor": planning_cfg["understock_factor"],
        "cover_cap": planning_cfg["cover_display_cap_weeks"],
    }


def compute_dashboard(products: Iterable[Product], config: Dict) -> Dict[str, Any]:
    """
    Run every calculation over one snapshot.

    Returns
    -------
    Dict[str, Any]
        summary, categories, items, budget, actions
    """

    products = tuple(products)
    options = planning_options(config)

    return {
        "summary": summarize_shop(
            products,
            weeks_per_month=options["weeks_per_month"],
            vat_divisor=options["vat_divisor"],
        ),
        "categories": plan_categories(products, **options),
        "items": plan_products(products, **options),
        "budget": buying_budget(
            products,
            weeks_per_month=options["weeks_per_month"],
            forecast_weeks=options["forecast_weeks"],
        ),
        "actions": classify_actions(
            products,
            thresholds=dict(config["actions"]),
            vat_divisor=options["vat_divisor"],
        ),
    }


# ==========================================================
# Reporting Helpers
# ==========================================================

def _log_summary(results: Dict[str, Any], config: Dict, logger) -> None:

    summary = results["summary"]
    budget = results["budget"]
    cap = config["planning"]["cover_display_cap_weeks"]

    headline_rows = [
        ("Products", summary["product_count"]),
        ("Cash in Stock", f"£{summary['total_stock_value']:,.2f}"),
        ("Sales (30 Days)", f"£{summary['total_sales_value']:,.2f}"),
        ("Weeks of Stock", format_cover_weeks(summary["weeks_cover"], cap)),
        ("Avg Profit Margin", f"{summary['average_margin_pct']:.1f}%"),
        ("Target Stock", f"£{budget['target_stock_value']:,.2f}"),
        ("Buying Budget", f"£{budget['budget']:,.2f}"),
        ("Open to Buy (items)", f"£{budget['open_to_buy']:,.2f}"),
    ]

    logger.info("\n" + tabulate(headline_rows, headers=["Metric", "Value"], tablefmt="grid"))

    categories = results["categories"]

    if not categories.empty:
        category_rows = [
            (
                row["category"],
                f"£{row['stock_value']:,.2f}",
                f"£{row['target_stock_value']:,.2f}",
                row["cover_display"],
                row["target_weeks_cover"],
                row["cover_status"],
                f"£{row['intake_requirement']:,.2f}",
            )
            for row in categories.to_dict("records")
        ]

        logger.info(
            "\n" + tabulate(
                category_rows,
                headers=["Category", "Stock", "Target", "Cover", "Benchmark", "Status", "Intake"],
                tablefmt="grid",
            )
        )

    logger.info(f"Action items raised: {len(results['actions'])}")


def _save_outputs(
    results: Dict[str, Any],
    products: Iterable[Product],
    config: Dict,
    logger,
) -> Dict[str, str]:

    reports_dir = config["paths"]["output"]["reports"]
    ensure_directory(reports_dir)

    timestamp = generate_timestamp()

    paths = {
        "categories": os.path.join(reports_dir, f"category_plan_{timestamp}.csv"),
        "items": os.path.join(reports_dir, f"item_plan_{timestamp}.csv"),
        "actions": os.path.join(reports_dir, f"action_items_{timestamp}.csv"),
        "budget": os.path.join(reports_dir, f"buying_budget_{timestamp}.csv"),
    }

    results["categories"].round(2).to_csv(paths["categories"], index=False)
    results["items"].round(2).to_csv(paths["items"], index=False)
    actions_to_frame(results["actions"]).to_csv(paths["actions"], index=False)
    pd.DataFrame([results["budget"]]).round(2).to_csv(paths["budget"], index=False)

    paths["inventory"] = write_inventory_csv(
        products,
        os.path.join(reports_dir, "stock_room_inventory.csv"),
    )

    for name, path in paths.items():
        logger.info(f"Saved {name}: {path}")

    return paths


def _write_advice(advice: str, config: Dict, logger) -> str:

    advice_dir = config["paths"]["output"]["advice"]
    ensure_directory(advice_dir)

    path = os.path.join(advice_dir, f"health_check_{generate_timestamp()}.md")

    with open(path, "w", encoding="utf-8") as f:
        f.write("# Shop Health Check\n\n")
        f.write(advice)
        f.write("\n")

    logger.info(f"Health check saved to: {path}")

    return path


# ==========================================================
# Main Planning Pipeline
# ==========================================================

def run_planning(config_path: str = "config/config.yaml") -> Dict[str, Any]:
    """
    Execute the planning workflow.
    """

    config = load_config(config_path)
    logger = get_logger(config)

    logger.info("========== PLANNING PIPELINE STARTED ==========")

    execution_mode = config["execution"]["mode"]

    try:

        # ------------------------------------------------------
        # 1. Load Inventory Snapshot
        # ------------------------------------------------------

        store = load_inventory_store(config)
        snapshot = store.snapshot()

        if not snapshot:
            logger.warning("Inventory is empty. Figures will be zero.")

        # ------------------------------------------------------
        # 2. Calculations
        # ------------------------------------------------------

        results = compute_dashboard(snapshot, config)
        _log_summary(results, config, logger)

        # ------------------------------------------------------
        # 3. Save Outputs
        # ------------------------------------------------------

        if config["execution"]["save_outputs"]:
            results["output_paths"] = _save_outputs(results, snapshot, config, logger)

        # ------------------------------------------------------
        # 4. Visualization (skipped in prod)
        # ------------------------------------------------------

        if (
            config["visualization"]["enabled"]
            and execution_mode != "prod"
            and not results["categories"].empty
        ):
            results["plot_path"] = plot_category_stock_vs_target(
                results["categories"], config, logger
            )

        # ------------------------------------------------------
        # 5. Advice Layer
        # ------------------------------------------------------

        if config["llm"]["enabled"]:

            logger.info("Requesting shop health check.")

            max_items = config["llm"]["max_context_items"]
            cap = config["planning"]["cover_display_cap_weeks"]
            breakdown = category_breakdown(results["categories"], cap)[:max_items]

            advice = generate_advice(
                build_health_check_prompt(results["summary"], breakdown, cap),
                build_shop_context(
                    results["summary"],
                    results["categories"],
                    results["budget"],
                    max_categories=max_items,
                    cap=cap,
                ),
                config=config,
            )

            results["advice"] = advice
            results["advice_path"] = _write_advice(advice, config, logger)

    except Exception:
        logger.exception("Planning pipeline failed due to an error.")
        raise

    logger.info("========== PLANNING PIPELINE COMPLETED ==========")

    return results
