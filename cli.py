#!/usr/bin/env python3
"""Simple CLI for running the IQ AI trading tools locally"""

import argparse
import asyncio
import json
from typing import Any, Dict, Optional

from atp_agent.core import ToolExecutor, ToolRegistry
from atp_agent.logging_config import setup_logging
from atp_agent.providers import IQAIProvider


def print_result(result: Any) -> None:
    """Pretty print a tool result"""
    if isinstance(result, str):
        print(result)
        return
    print(json.dumps(result, indent=2, default=str))


def print_prediction(result: Any) -> None:
    """Short human summary of a next-action analysis"""
    if not isinstance(result, dict):
        print(f"❌ {result}")
        return

    print(f"\n🔮 Next-action analysis for {result['mostActiveAgent']}")
    print("=" * 50)
    metrics = result["metrics"]
    print(f"Transactions:      {metrics['totalTransactions']} "
          f"({metrics['buyTransactions']} buys / {metrics['sellTransactions']} sells)")
    print(f"Total volume:      ${result['totalVolume']:,.2f} USD")
    print(f"Average trade:     ${metrics['averageUsdAmount']:,.2f} USD")
    print(f"Trades per page:   {result['tradingFrequency']:.2f}")
    print(f"Buy/sell ratio:    {result['buyVsSellRatio']:.2f}")
    print(f"Sentiment:         {result['marketSentiment']}")
    print(f"Predicted action:  {result['predictedAction']} (confidence {result['confidence']:.2f})")

    collection = result.get("collection", {})
    if collection.get("pagesFailed") or collection.get("timedOut"):
        print(f"\n⚠️  {collection['pagesFailed']} of {collection['pagesRequested']} pages failed"
              + (", collection timed out" if collection.get("timedOut") else ""))


def _filters(args: argparse.Namespace) -> Dict[str, Any]:
    params = {
        "ticker": getattr(args, "ticker", None),
        "agentTokenContract": getattr(args, "contract", None),
        "userId": getattr(args, "user_id", None),
    }
    return {key: value for key, value in params.items() if value is not None}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="IQ AI trading analytics CLI")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    parser.add_argument("--base-url", default=None, help="Override the IQ AI base URL")
    subparsers = parser.add_subparsers(dest="command")

    def with_filters(sub: argparse.ArgumentParser) -> argparse.ArgumentParser:
        sub.add_argument("--ticker", help="Agent ticker")
        sub.add_argument("--contract", help="Agent token contract address")
        sub.add_argument("--user-id", help="Trader user id")
        return sub

    subparsers.add_parser("most-traded", help="Most traded agent over the last 7 days")
    subparsers.add_parser("metrics", help="Overall platform trading metrics")

    history_parser = with_filters(subparsers.add_parser("history", help="One page of transaction history"))
    history_parser.add_argument("--page", type=int, default=1, help="Page number (default: 1)")

    analytics_parser = with_filters(subparsers.add_parser("analytics", help="Advanced transaction analytics"))
    analytics_parser.add_argument("--pages", type=int, help="Pages to collect")

    predict_parser = with_filters(subparsers.add_parser("predict", help="Predict next trading actions"))
    predict_parser.add_argument("--depth", type=int, help="Pages to analyse")
    predict_parser.add_argument("--json", action="store_true", help="Print the raw analysis document")

    tool_parser = subparsers.add_parser("tool", help="Run any registered tool with JSON arguments")
    tool_parser.add_argument("name", nargs="?", help="Tool name (omit to list tools)")
    tool_parser.add_argument("arguments", nargs="?", default="{}", help="JSON object of arguments")

    return parser


async def run(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    command = args.command.lower()
    registry = ToolRegistry()

    async with IQAIProvider(base_url=args.base_url) as provider:
        executor = ToolExecutor(registry, provider=provider)

        if command == "most-traded":
            print_result(await executor.execute("get_most_traded_agent"))

        elif command == "metrics":
            print_result(await executor.execute("get_transaction_metrics"))

        elif command == "history":
            print_result(await executor.execute(
                "get_transaction_history", {**_filters(args), "page": args.page}
            ))

        elif command == "analytics":
            params = _filters(args)
            if args.pages is not None:
                params["pages"] = args.pages
            print_result(await executor.execute("get_advanced_analytics", params))

        elif command == "predict":
            params = _filters(args)
            if args.depth is not None:
                params["analysisDepth"] = args.depth
            result = await executor.execute("predict_next_actions", params)
            if args.json:
                print_result(result)
            else:
                print_prediction(result)

        elif command == "tool":
            if not args.name:
                for definition in registry.get_definitions():
                    print(f"{definition.name:<26} {definition.description}")
                return
            try:
                arguments = json.loads(args.arguments)
            except json.JSONDecodeError as e:
                print(f"❌ Arguments must be a JSON object: {e}")
                return
            print_result(await executor.execute(args.name, arguments))

        else:
            print(f"❌ Unknown command: {command}")
            parser.print_help()


async def main(argv: Optional[list] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    setup_logging(args.log_level)
    await run(args, parser)


if __name__ == "__main__":
    asyncio.run(main())
