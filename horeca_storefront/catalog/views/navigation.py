# catalog/views/navigation.py

from __future__ import annotations

from django.shortcuts import redirect, resolve_url
from django.utils.http import url_has_allowed_host_and_scheme


def safe_redirect(request, candidate: str | None, fallback: str):
    """Redirect to `candidate` when it stays on this site, else to `fallback`."""
    target = (candidate or "").strip()
    if target and url_has_allowed_host_and_scheme(
        target,
        allowed_hosts={request.get_host()},
        require_https=request.is_secure(),
    ):
        return redirect(target)
    return redirect(resolve_url(fallback))
