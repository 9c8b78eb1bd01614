"""Tests for EmbeddingClient and ModerationClient."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from aionic.openai._embeddings import EmbeddingClient
from aionic.openai._exceptions import ResponseFormatError
from aionic.openai._moderations import ModerationClient
from tests.conftest import MockResponse

CATEGORIES = [
    "sexual",
    "hate",
    "harassment",
    "self-harm",
    "sexual/minors",
    "hate/threatening",
    "violence/graphic",
    "self-harm/intent",
    "self-harm/instructions",
    "harassment/threatening",
    "violence",
]


def _embedding_body(*vectors: list[float]) -> dict:
    return {
        "object": "list",
        "data": [{"object": "embedding", "embedding": v, "index": i} for i, v in enumerate(vectors)],
        "model": "text-embedding-ada-002",
        "usage": {"prompt_tokens": 8, "total_tokens": 8},
    }


@pytest.mark.parametrize("value", ["The food was delicious", ["a", "b"], [1212, 318, 257]])
def test_embed_inputs(mock_post: MagicMock, value: object) -> None:
    mock_post.return_value = MockResponse(json_data=_embedding_body([0.1, -0.2], [0, 1]))
    resp = EmbeddingClient().embed(value)  # type: ignore[arg-type]

    assert mock_post.call_args.kwargs["json"] == {"model": "text-embedding-ada-002", "input": value}
    assert resp.data[0].embedding == (0.1, -0.2)
    assert resp.data[1].embedding == (0.0, 1.0)
    assert resp.usage.total_tokens == 8


def test_embed_set_model(mock_post: MagicMock) -> None:
    mock_post.return_value = MockResponse(json_data=_embedding_body([0.0]))
    EmbeddingClient().set_model("text-embedding-3-small").embed("x")
    assert mock_post.call_args.kwargs["json"]["model"] == "text-embedding-3-small"


def test_embed_rejects_non_numeric_vector(mock_post: MagicMock) -> None:
    mock_post.return_value = MockResponse(json_data=_embedding_body(["x"]))  # type: ignore[list-item]
    with pytest.raises(ResponseFormatError):
        EmbeddingClient().embed("x")


def test_moderate(mock_post: MagicMock) -> None:
    categories = dict.fromkeys(CATEGORIES, False) | {"violence": True}
    scores = dict.fromkeys(CATEGORIES, 0.001) | {"violence": 0.97}
    mock_post.return_value = MockResponse(
        json_data={
            "id": "modr-XXXXX",
            "model": "text-moderation-007",
            "results": [{"flagged": True, "categories": categories, "category_scores": scores}],
        }
    )

    resp = ModerationClient().moderate("I will hurt you")

    assert mock_post.call_args.kwargs["json"] == {"input": "I will hurt you"}
    result = resp.results[0]
    assert result.flagged
    assert result.categories.violence
    assert not result.categories.self_harm_intent
    assert result.category_scores.violence == 0.97
    assert result.category_scores.sexual_minors == 0.001


def test_moderate_missing_category(mock_post: MagicMock) -> None:
    categories = dict.fromkeys(CATEGORIES[:-1], False)
    scores = dict.fromkeys(CATEGORIES, 0.0)
    mock_post.return_value = MockResponse(
        json_data={
            "id": "modr-1",
            "model": "m",
            "results": [{"flagged": False, "categories": categories, "category_scores": scores}],
        }
    )
    with pytest.raises(ResponseFormatError, match="violence"):
        ModerationClient().moderate("hi")
