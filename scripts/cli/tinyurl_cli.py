#!/usr/bin/env python3
"""
Command-line client for a running TinyURL service.

Usage:
    python tinyurl_cli.py shorten <url> [--custom-code CODE]
    python tinyurl_cli.py resolve <short_code>
    python tinyurl_cli.py stats <short_code>
    python tinyurl_cli.py list
    python tinyurl_cli.py delete <short_code>
    python tinyurl_cli.py health
"""

import argparse
import json
import os
import sys
import uuid
from pathlib import Path
from typing import Optional, Dict, Any

import requests

DEFAULT_BASE_URL = "http://localhost:9200"
CLIENT_ID_HEADER = "X-Client-Id"
CLIENT_ID_FILE = Path.home() / ".tinyurl_client_id"


def load_or_create_client_id(path: Optional[Path] = None) -> str:
    """Anonymous client id persisted between runs, like a browser's stored id."""
    path = path or CLIENT_ID_FILE
    try:
        client_id = path.read_text(encoding="utf-8").strip()
        if client_id:
            return client_id
    except FileNotFoundError:
        pass

    client_id = str(uuid.uuid4())
    path.write_text(client_id + "\n", encoding="utf-8")
    return client_id


class TinyURLCLI:
    """Command-line interface over the TinyURL HTTP API."""

    def __init__(
        self,
        base_url: str,
        client_id: str,
        timeout: float = 5.0,
        session: Optional[requests.Session] = None,
    ):
        """Initialize CLI."""
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers[CLIENT_ID_HEADER] = client_id

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        return self.session.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)

    @staticmethod
    def _emit(payload: Dict[str, Any]) -> int:
        if payload.get("success"):
            print(json.dumps(payload, indent=2))
            return 0
        print(json.dumps(payload, indent=2), file=sys.stderr)
        return 1

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            return response.json().get("error") or f"HTTP {response.status_code}"
        except ValueError:
            return f"HTTP {response.status_code}"

    def shorten(self, url: str, custom_code: Optional[str] = None) -> int:
        """Shorten a URL."""
        body = {"longUrl": url}
        if custom_code:
            body["customShortCode"] = custom_code

        response = self._request("POST", "/api/urls", json=body)
        if response.status_code != 200:
            return self._emit({"success": False, "error": self._error_message(response)})

        data = response.json()
        return self._emit({
            "success": True,
            **data,
            "message": f"Successfully shortened URL to: {data['shortUrl']}",
        })

    def resolve(self, short_code: str) -> int:
        """Resolve a short code (counts a click)."""
        response = self._request("GET", f"/api/urls/{short_code}")
        if response.status_code == 404:
            return self._emit({"success": False, "error": f"Short code '{short_code}' not found"})
        if response.status_code != 200:
            return self._emit({"success": False, "error": self._error_message(response)})
        return self._emit({"success": True, **response.json()})

    def stats(self, short_code: str) -> int:
        """Get statistics for a short code."""
        response = self._request("GET", f"/api/urls/{short_code}/stats")
        if response.status_code == 404:
            return self._emit({"success": False, "error": f"Short code '{short_code}' not found"})
        if response.status_code != 200:
            return self._emit({"success": False, "error": self._error_message(response)})
        return self._emit({"success": True, **response.json()})

    def list_urls(self) -> int:
        """List this client's URLs, newest first."""
        response = self._request("GET", "/api/urls")
        if response.status_code != 200:
            return self._emit({"success": False, "error": self._error_message(response)})

        urls = response.json()
        return self._emit({"success": True, "count": len(urls), "urls": urls})

    def delete(self, short_code: str) -> int:
        """Delete one of this client's URLs."""
        response = self._request("DELETE", f"/api/urls/{short_code}")
        if response.status_code == 204:
            return self._emit({"success": True, "message": f"Deleted {short_code}"})
        if response.status_code == 404:
            return self._emit({"success": False, "error": f"Short code '{short_code}' not found or not yours"})
        return self._emit({"success": False, "error": self._error_message(response)})

    def health(self) -> int:
        """Check service health."""
        response = self._request("GET", "/api/health")
        if response.status_code != 200:
            return self._emit({"success": False, "error": self._error_message(response)})

        data = response.json()
        return self._emit({"success": data.get("status") == "healthy", "health": data})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="TinyURL CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL
  %(prog)s shorten https://example.com/long/url

  # Shorten with custom code
  %(prog)s shorten https://example.com/long/url --custom-code my_link

  # Resolve, inspect and delete
  %(prog)s resolve my_link
  %(prog)s stats my_link
  %(prog)s delete my_link

  # List your URLs
  %(prog)s list
        """
    )

    parser.add_argument(
        "--base-url",
        default=os.getenv("TINYURL_BASE_URL", DEFAULT_BASE_URL),
        help=f"Service URL (default: from TINYURL_BASE_URL env or {DEFAULT_BASE_URL})"
    )

    parser.add_argument(
        "--client-id",
        default=os.getenv("TINYURL_CLIENT_ID"),
        help=f"Client id sent as {CLIENT_ID_HEADER} (default: TINYURL_CLIENT_ID env or a stored id)"
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=5.0,
        help="Request timeout in seconds"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")
    shorten_parser.add_argument("--custom-code", help="Custom short code")

    resolve_parser = subparsers.add_parser("resolve", help="Get original URL (counts a click)")
    resolve_parser.add_argument("short_code", help="Short code to lookup")

    stats_parser = subparsers.add_parser("stats", help="Get URL statistics")
    stats_parser.add_argument("short_code", help="Short code to get stats for")

    subparsers.add_parser("list", help="List your URLs")

    delete_parser = subparsers.add_parser("delete", help="Delete one of your URLs")
    delete_parser.add_argument("short_code", help="Short code to delete")

    subparsers.add_parser("health", help="Check service health")

    return parser


def main(argv=None, session: Optional[requests.Session] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    cli = TinyURLCLI(
        base_url=args.base_url,
        client_id=args.client_id or load_or_create_client_id(),
        timeout=args.timeout,
        session=session,
    )

    try:
        if args.command == "shorten":
            return cli.shorten(args.url, args.custom_code)
        elif args.command == "resolve":
            return cli.resolve(args.short_code)
        elif args.command == "stats":
            return cli.stats(args.short_code)
        elif args.command == "list":
            return cli.list_urls()
        elif args.command == "delete":
            return cli.delete(args.short_code)
        elif args.command == "health":
            return cli.health()
        else:
            parser.print_help()
            return 1
    except requests.RequestException as e:
        print(json.dumps({
            "success": False,
            "error": f"Request failed: {str(e)}"
        }, indent=2), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
