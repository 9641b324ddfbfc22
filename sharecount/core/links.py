"""
sharecount/core/links.py
═══════════════════════════════════════════════════════════════════════════════
Share buttons: one descriptor per service, each carrying the share URL,
label, icon class and the formatted count.

  {"type": "twitter", "class": "style-bubble", "url": …, "title": …,
   "img": …, "count": "1.2k", "link": "https://twitter.com/share?…",
   "label": "Tweet", "icon": "fa fa-twitter", "target": "_blank"}

render_html() turns a list of descriptors into the button markup.
═══════════════════════════════════════════════════════════════════════════════
"""

import html
from typing import Iterable, Optional
from urllib.parse import quote

from sharecount.core.hooks import Hooks
from sharecount.core.identity import ContentItem, ExternalURL, Identity, Site
from sharecount.core.share_cache import ShareCountCache

# service → (share URL template, label, icon)
SHARE_TARGETS: dict[str, tuple[str, str, str]] = {
    "facebook":        ("https://www.facebook.com/sharer/sharer.php?u={url}&display=popup&ref=plugin&src=share_button",
                        "Facebook", "fa fa-facebook"),
    "facebook_likes":  ("https://www.facebook.com/plugins/like.php?href={url}", "Like", "fa fa-facebook"),
    "facebook_shares": ("https://www.facebook.com/sharer/sharer.php?u={url}&display=popup&ref=plugin&src=share_button",
                        "Share", "fa fa-facebook"),
    "twitter":         ("https://twitter.com/share?url={url}&text={title}", "Tweet", "fa fa-twitter"),
    "pinterest":       ("https://pinterest.com/pin/create/button/?url={url}&media={img}&description={title}",
                        "Pin", "fa fa-pinterest-p"),
    "linkedin":        ("https://www.linkedin.com/shareArticle?mini=true&url={url}", "LinkedIn", "fa fa-linkedin"),
    "google":          ("https://plus.google.com/share?url={url}", "Google+", "fa fa-google-plus"),
    "stumbleupon":     ("https://www.stumbleupon.com/submit?url={url}&title={title}",
                        "StumbleUpon", "fa fa-stumbleupon"),
}


class UnknownContent(LookupError):
    pass


def _page(cache: ShareCountCache, identity: Identity) -> dict:
    settings = cache.settings
    if isinstance(identity, Site):
        page = {"url": cache.site_url(), "title": settings.site_name, "img": settings.default_image}
    elif isinstance(identity, ExternalURL):
        page = {"url": identity.url, "title": "", "img": settings.default_image}
    elif isinstance(identity, ContentItem):
        record = cache.content.get(identity.id)
        if record is None:
            raise UnknownContent(identity.id)
        page = {"url": record.url, "title": record.title, "img": record.image or settings.default_image}
    else:
        raise TypeError(f"not an identity: {identity!r}")
    page["img"] = cache.hooks.image(page["img"], identity)
    return page


async def build_links(
    cache: ShareCountCache,
    identity: Identity,
    services: Optional[Iterable[str]] = None,
    style: Optional[str] = None,
    round_to: Optional[int] = None,
) -> list[dict]:
    """Link descriptors for `services` (default: the configured set)."""
    page     = _page(cache, identity)
    services = list(services or cache.settings.services)
    style    = style or cache.settings.style
    quoted   = {k: quote(v or "", safe="") for k, v in page.items()}

    links = []
    for service in services:
        template, label, icon = SHARE_TARGETS.get(service, ("", "", ""))
        link = {
            "type":   service,
            "class":  f"style-{style}",
            **page,
            "count":  await cache.get_single_count(identity, service, round_to),
            "link":   template.format(**quoted),
            "label":  label,
            "icon":   icon,
            "target": "_blank" if template else "",
        }
        links.append(cache.hooks.link(link))
    return links


def render_html(links: list[dict], location: str = "", hooks: Optional[Hooks] = None) -> str:
    e = html.escape
    parts = []
    for link in links:
        target = f' target="{e(link["target"])}"' if link.get("target") else ""
        parts.append(
            f'<a href="{e(link["link"])}"{target} '
            f'class="share-count-button {e(link["class"])} {e(link["type"])}">'
            f'<span class="share-count-icon-label">'
            f'<i class="share-count-icon {e(link["icon"])}"></i>'
            f'<span class="share-count-label">{e(link["label"])}</span>'
            f'</span>'
            f'<span class="share-count">{e(str(link["count"]))}</span>'
            f'</a>'
        )
    wrap_class = f"share-count-wrap {e(location)}".strip()
    markup = f'<div class="{wrap_class}">' + "".join(parts) + "</div>"
    return (hooks or Hooks()).display(markup, location)
