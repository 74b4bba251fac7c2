"""URL normalization for library lookups."""


def normalize_url(url: str) -> str:
    """
    Convert a library URL to its canonical lookup form.

    Lowercases, strips the http(s):// scheme and any trailing slash.

    Example:
        >>> normalize_url("https://GitHub.com/spf13/cobra/")
        'github.com/spf13/cobra'
    """
    url = url.lower()
    for scheme in ("https://", "http://"):
        if url.startswith(scheme):
            url = url[len(scheme):]
            break
    if url.endswith("/"):
        url = url[:-1]
    return url
