"""02 - Single prompt.

Ask one question. The answer is streamed to stdout as it arrives and also
returned; the history is left untouched.
"""

from aionic import ChatClient

client = ChatClient().set_temperature(0.2)
answer = client.ask("What is the capital of France? Reply in one sentence.")

print(f"History length after a non-persisted ask: {len(client.config.messages)}")
print(f"Characters received: {len(answer)}")
