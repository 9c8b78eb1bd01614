"""06 - Text embeddings."""

from aionic import EmbeddingClient

response = EmbeddingClient().embed(["The food was delicious", "The waiter was friendly"])

for item in response.data:
    print(f"[{item.index}] {len(item.embedding)} dims, first values {item.embedding[:3]}")
print(f"Tokens used: {response.usage.total_tokens}")
