"""01 - Interactive chat.

Start a conversation loop that keeps every turn in the history.
Press Ctrl-D or Ctrl-C to quit.
"""

from aionic import ChatClient

client = ChatClient().set_model("gpt-3.5-turbo").set_primer("You are a helpful assistant.")
client.chat()
