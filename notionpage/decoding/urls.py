"""
Image URL normalization.

Sources of images and page covers are not always fetchable directly, but
they can be fetched through the document host's image proxy:

    /images/page-cover/met_vincent_van_gogh_cradle.jpg
    =>
    https://www.notion.so/image/https%3A%2F%2Fwww.notion.so%2Fimages%2Fpage-cover%2Fmet_vincent_van_gogh_cradle.jpg

The proxy also allows resizing with a ?width=N argument.
"""

from urllib.parse import quote


NOTION_HOST = "https://www.notion.so"
IMAGE_PROXY_PREFIX = NOTION_HOST + "/image/"
IMAGE_PROXY_MARKER = "//www.notion.so/image/"


def make_image_url(uri: str) -> str:
    """
    Turn an image source into a proxied, fetchable URL.

    Args:
        uri: Relative path on the document host or absolute https:// URL

    Returns:
        The proxied URL; empty and already proxied input is returned as is
    """
    if not uri or IMAGE_PROXY_MARKER in uri:
        return uri
    # Anything without https:// is relative to the document host
    # (e.g. built-in page covers); absolute URLs usually point at S3.
    if not uri.startswith("https://"):
        uri = NOTION_HOST + uri
    return IMAGE_PROXY_PREFIX + quote(uri, safe="")


def with_width(url: str, width: int) -> str:
    """Add the proxy's resize argument to a proxied image URL."""
    if not url:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}width={int(width)}"
