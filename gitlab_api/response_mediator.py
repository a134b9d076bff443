"""
Decoding of API responses
"""

from typing import Any

import requests

PAGINATION_RELATIONS = ("next", "prev", "first", "last")


class ResponseMediator:
    """Static helpers turning a requests.Response into usable data"""

    @staticmethod
    def get_content(response: requests.Response) -> Any:
        """
        Return the decoded body of a response

        JSON bodies are decoded; anything else is returned as text.
        """
        body = response.text
        content_type = ResponseMediator.get_header(response, "Content-Type") or ""

        if body and content_type.startswith("application/json"):
            return response.json()

        return body

    @staticmethod
    def get_pagination(response: requests.Response) -> dict[str, str]:
        """
        Extract pagination links from the Link header

        Returns:
            Mapping of relation (next, prev, first, last) -> URL,
            containing only the relations present
        """
        links = response.links or {}
        return {
            relation: links[relation]["url"]
            for relation in PAGINATION_RELATIONS
            if relation in links and "url" in links[relation]
        }

    @staticmethod
    def get_header(response: requests.Response, name: str) -> str | None:
        """Case-insensitive header lookup"""
        return response.headers.get(name)

    @staticmethod
    def get_error_message(response: requests.Response) -> str | None:
        """
        Extract a human readable error message from an error response

        The server reports errors as {"message": ...} or {"error": ...}, where
        message may be a string, a list, or a mapping of field -> reasons.
        """
        try:
            content = ResponseMediator.get_content(response)
        except ValueError:
            return None

        if not isinstance(content, dict):
            return None

        if "message" in content:
            return _format_message(content["message"])
        if "error" in content:
            return _format_message(content["error"])

        return None


def _format_message(message: Any) -> str:
    if isinstance(message, dict):
        parts = []
        for field, reasons in message.items():
            if isinstance(reasons, list):
                reasons = ", ".join(str(reason) for reason in reasons)
            parts.append(f"{field}: {reasons}")
        return ", ".join(parts)

    if isinstance(message, list):
        return ", ".join(str(item) for item in message)

    return str(message)
