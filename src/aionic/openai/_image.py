"""Image generation, edits and variations."""

from __future__ import annotations

import logging
from typing import Self

from aionic.openai._base import BaseClient
from aionic.openai._config import ImageConfig, ImageResponseFormat, ImageSize
from aionic.openai._http import FilePart, json_body
from aionic.openai._types import ImageResponse

logger = logging.getLogger(__name__)


class ImageClient(BaseClient[ImageConfig]):
    """Create images from a prompt, or edit and vary existing local images.

    Every operation returns the image URLs or base64 payloads, depending on
    the configured response format.
    """

    config_type = ImageConfig

    def set_response_format(self, response_format: ImageResponseFormat | str) -> Self:
        self.config.response_format = str(response_format)
        return self

    def set_max_images(self, n: int) -> Self:
        self.config.n = n
        return self

    def set_size(self, size: ImageSize | str) -> Self:
        self.config.size = str(size)
        return self

    def create(self, prompt: str) -> list[str]:
        """Generate images for *prompt*."""
        self.config.prompt = prompt
        self.config.image = None
        self.config.mask = None
        r = self._post_json("images/generations")
        return self._parse_response(ImageResponse.from_wire(json_body(r)))

    def edit(self, prompt: str, image: str, mask: str | None = None) -> list[str]:
        """Edit the local *image* according to *prompt*, optionally restricted by *mask*."""
        self.config.image = image
        if mask is not None:
            self.config.mask = mask
        self.config.prompt = prompt
        self._reset_invalid_settings()
        return self._upload("images/edits", image)

    def variation(self, image: str) -> list[str]:
        """Create variations of the local *image*."""
        self.config.image = image
        self.config.prompt = None
        self.config.mask = None
        return self._upload("images/variations", image)

    def _reset_invalid_settings(self) -> None:
        cfg = self.config
        if cfg.n is not None and not ImageConfig.is_valid_n(cfg.n):
            logger.warning("Invalid image count %s; using %s", cfg.n, ImageConfig.DEFAULT_N)
            cfg.n = ImageConfig.DEFAULT_N
        if cfg.size is not None and not ImageConfig.is_valid_size(cfg.size):
            logger.warning("Invalid image size %r; using %r", cfg.size, ImageConfig.DEFAULT_SIZE)
            cfg.size = ImageConfig.DEFAULT_SIZE
        if cfg.response_format is not None and not ImageConfig.is_valid_response_format(
            cfg.response_format
        ):
            logger.warning(
                "Invalid image response format %r; using %r",
                cfg.response_format,
                ImageConfig.DEFAULT_RESPONSE_FORMAT,
            )
            cfg.response_format = ImageConfig.DEFAULT_RESPONSE_FORMAT

    def _upload(self, path: str, image: str) -> list[str]:
        cfg = self.config
        files: dict[str, FilePart] = {"image": self.create_file_upload_part(image)}
        try:
            if cfg.mask is not None:
                files["mask"] = self.create_file_upload_part(cfg.mask)
        except FileNotFoundError:
            files["image"][1].close()
            raise

        data: dict[str, str] = {}
        if cfg.prompt is not None:
            data["prompt"] = cfg.prompt
        if cfg.response_format is not None:
            data["response_format"] = cfg.response_format
        if cfg.size is not None:
            data["size"] = cfg.size
        if cfg.n is not None:
            data["n"] = str(cfg.n)
        if cfg.user is not None:
            data["user"] = cfg.user

        r = self._post_multipart(path, data, files)
        return self._parse_response(ImageResponse.from_wire(json_body(r)))

    def _parse_response(self, response: ImageResponse) -> list[str]:
        if self.config.response_format in (None, ImageResponseFormat.URL):
            return [d.url for d in response.data if d.url is not None]
        return [d.b64_json for d in response.data if d.b64_json is not None]
