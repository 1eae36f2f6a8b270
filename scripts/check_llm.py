#!/usr/bin/env python3
"""
Kenai LLM connectivity check

Sends a tiny prompt to the configured LLM provider and reports whether
the API answers.
"""

import argparse
import asyncio
import sys

from kenai.core.config import get_settings
from kenai.services.llm import create_llm


async def check(provider: str) -> bool:
    llm = create_llm(provider=provider)
    try:
        reply = await llm.generate("Reply with the single word: pong", max_tokens=10)
    except Exception as exc:
        print(f"✗ {provider} failed: {exc}")
        return False
    print(f"✓ {provider} is reachable. Reply: {reply.strip()[:60]}")
    return True


def main():
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Check that the configured LLM answers")
    parser.add_argument(
        "--provider",
        choices=["ollama", "claude"],
        default=settings.llm_provider,
        help=f"LLM provider (default: {settings.llm_provider})",
    )
    args = parser.parse_args()

    if args.provider == "claude":
        print(f"Key prefix: {settings.claude_api_key[:7] or '(none)'}")
    print(f"Testing {args.provider} connection...")
    ok = asyncio.run(check(args.provider))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
