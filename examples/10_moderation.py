"""10 - Moderation."""

from dataclasses import asdict

from aionic import ModerationClient

result = ModerationClient().moderate("I want to hug everyone").results[0]

print("Flagged:", result.flagged)
for name, score in asdict(result.category_scores).items():
    print(f"  {name:<24} {score:.4f}")
