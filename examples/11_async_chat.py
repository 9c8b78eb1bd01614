"""11 - Async chat client.

Runs independent questions concurrently, one client per conversation.
"""

import asyncio

from aionic import AsyncChatClient


async def main():
    questions = [
        "Name one planet in our solar system.",
        "Name one programming language.",
        "Name one chemical element.",
    ]
    clients = [AsyncChatClient().disable_stdout() for _ in questions]
    answers = await asyncio.gather(*(c.ask(q) for c, q in zip(clients, questions, strict=True)))

    for question, answer in zip(questions, answers, strict=True):
        print(f"  Q: {question}")
        print(f"  A: {answer}\n")


if __name__ == "__main__":
    asyncio.run(main())
