"""HTML fetching utilities with SSRF protection."""
from __future__ import annotations

import logging
import socket
from ipaddress import ip_address
from urllib.parse import urljoin, urlparse

import requests

from pagelens.config.settings import settings

logger = logging.getLogger(__name__)


def is_url(source: str) -> bool:
    parsed = urlparse(source)
    return parsed.scheme in {"http", "https"}


def _validate_ip(ip_str: str) -> tuple[bool, str]:
    """Check if an IP address is safe (not private/internal)."""
    try:
        ip = ip_address(ip_str)
        if ip.is_private or ip.is_loopback or ip.is_reserved or ip.is_link_local:
            return False, f"Access to private/internal IP addresses is forbidden: {ip_str}"
        return True, ""
    except ValueError:
        return False, f"Invalid IP address: {ip_str}"


def _resolve_and_validate_url(url: str) -> tuple[str, str, str]:
    """Resolve the URL's hostname and validate the resulting IP.

    Returns (resolved_ip, hostname, error_message); error_message is empty
    when the URL is safe to request.
    """
    parsed = urlparse(url)

    if parsed.scheme not in {"http", "https"}:
        return "", "", "Only http and https schemes are allowed"

    hostname = parsed.hostname
    if not hostname:
        return "", "", "Invalid URL: hostname not found"

    try:
        resolved_ip = socket.gethostbyname(hostname)
    except socket.gaierror:
        return "", "", f"Could not resolve hostname: {hostname}"

    is_safe, error_msg = _validate_ip(resolved_ip)
    if not is_safe:
        return "", "", error_msg

    return resolved_ip, hostname, ""


def _get(url: str) -> requests.Response:
    response = requests.get(
        url,
        timeout=settings.fetcher.request_timeout,
        allow_redirects=False,
        stream=True,
        headers={"User-Agent": settings.fetcher.user_agent},
    )
    content_length = response.headers.get("Content-Length")
    if content_length and int(content_length) > settings.fetcher.max_response_size:
        response.close()
        raise ValueError(
            f"Response too large: {int(content_length)} bytes (max {settings.fetcher.max_response_size})"
        )
    return response


def fetch_html(source: str) -> str:
    """Fetch raw HTML from a URL.

    Security measures:
    - Only accepts http/https URLs (no local file paths)
    - Validates resolved IP is not private/internal (SSRF protection)
    - Follows redirects manually, re-validating every target
    - Limits response size to prevent memory exhaustion

    Raises:
        ValueError: If the URL is rejected or the response is too large
        requests.HTTPError: If the final response has an error status
    """
    if not is_url(source):
        raise ValueError("Only http and https URLs are allowed")

    _, _, error_msg = _resolve_and_validate_url(source)
    if error_msg:
        raise ValueError(f"SSRF protection: {error_msg}")

    response = _get(source)

    redirect_count = 0
    while response.is_redirect and redirect_count < settings.fetcher.max_redirects:
        redirect_count += 1
        location = response.headers.get("Location", "")
        if not location:
            break

        redirect_url = urljoin(source, location)
        _, _, redirect_error = _resolve_and_validate_url(redirect_url)
        if redirect_error:
            raise ValueError(f"SSRF protection: Redirect blocked - {redirect_error}")

        logger.debug("Following redirect %s -> %s", source, redirect_url)
        response.close()
        response = _get(redirect_url)
        source = redirect_url

    response.raise_for_status()

    # Enforce the size limit for responses without Content-Length
    chunks = []
    total_size = 0
    for chunk in response.iter_content(chunk_size=8192, decode_unicode=False):
        total_size += len(chunk)
        if total_size > settings.fetcher.max_response_size:
            response.close()
            raise ValueError(f"Response too large: exceeded {settings.fetcher.max_response_size} bytes")
        chunks.append(chunk)

    content_bytes = b"".join(chunks)
    encoding = response.encoding or "utf-8"
    try:
        return content_bytes.decode(encoding)
    except (UnicodeDecodeError, LookupError):
        return content_bytes.decode("utf-8", errors="replace")
