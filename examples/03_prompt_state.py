"""03 - Prompt with state.

Persisted turns are sent back with every later request, so the model can
refer to earlier answers.
"""

from aionic import ChatClient

client = ChatClient().disable_stdout().set_primer("Answer tersely")

client.ask("2+2?", persist=True)
answer = client.ask("What did I just ask?", persist=True)

print("Answer:", answer)
print("History:")
for message in client.config.messages:
    print(f"  {message}")
