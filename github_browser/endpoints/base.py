"""Base class for API endpoints.

This module provides the base class that all endpoint groups inherit
from. It gives them the HTTP client and the shared parsing helpers.

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel

if TYPE_CHECKING:
    from github_browser.config import ClientConfig
    from github_browser.utils.http import HTTPClient

T = TypeVar("T", bound=BaseModel)


class BaseEndpoint:
    """Base class for API endpoint groups.

    Attributes:
        _http: The HTTP client for making requests.
        _config: Client configuration.

    """

    __slots__ = ("_config", "_http")

    def __init__(self, http: HTTPClient, config: ClientConfig) -> None:
        """Initialize the endpoint with HTTP client and config.

        Args:
            http: The HTTP client for making requests.
            config: Client configuration.

        """
        self._http = http
        self._config = config

    def _parse_response(self, data: dict[str, Any], model: type[T]) -> T:
        """Parse a dictionary response into a Pydantic model.

        Args:
            data: Raw dictionary from API response.
            model: Pydantic model class to parse into.

        Returns:
            Parsed model instance.

        """
        return model.model_validate(data)

    def _parse_list_response(self, data: Any, model: type[T]) -> list[T]:
        """Parse a list of dictionaries into Pydantic models.

        A body that isn't a list parses as an empty list.

        Args:
            data: List of raw dictionaries from API response.
            model: Pydantic model class to parse each item into.

        Returns:
            List of parsed model instances.

        """
        if not isinstance(data, list):
            return []
        return [model.model_validate(item) for item in data]

    def _build_pagination_params(
        self,
        page: int = 1,
        per_page: int | None = None,
    ) -> dict[str, int]:
        """Build pagination query parameters.

        Args:
            page: Page number (1-indexed).
            per_page: Items per page (capped at 100, config default if None).

        Returns:
            Dictionary with ``page`` and ``per_page``.

        """
        if per_page is None:
            per_page = self._config.per_page
        return {
            "page": max(page, 1),
            "per_page": max(1, min(per_page, self._config.MAX_PER_PAGE)),
        }
