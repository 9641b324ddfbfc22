from dataclasses import replace

import pytest

from sharecount.core.hooks import Hooks
from sharecount.core.identity import ContentItem, ExternalURL, Site
from sharecount.core.links import UnknownContent, build_links, render_html
from sharecount.core.share_cache import ShareCountCache
from sharecount.core.store import MemoryStore


async def _links(cache, identity, *args, **kwargs):
    return await build_links(cache, identity, *args, **kwargs)


@pytest.mark.asyncio
async def test_content_links_carry_page_details_and_counts(cache):
    links = await _links(cache, ContentItem("1"), ["facebook", "twitter"], "bubble")

    fb, tw = links
    assert fb["type"] == "facebook"
    assert fb["class"] == "style-bubble"
    assert fb["label"] == "Facebook"
    assert fb["icon"] == "fa fa-facebook"
    assert fb["count"] == "1.2k"
    assert fb["link"].startswith("https://www.facebook.com/sharer/sharer.php?u=https%3A%2F%2Fexample.com%2Ffresh%2F")
    assert tw["label"] == "Tweet"
    assert tw["count"] == "45"
    assert tw["link"] == "https://twitter.com/share?url=https%3A%2F%2Fexample.com%2Ffresh%2F&text=Fresh"
    assert tw["target"] == "_blank"


@pytest.mark.asyncio
async def test_default_services_and_style_from_settings(cache):
    links = await _links(cache, ContentItem("1"))
    assert [l["type"] for l in links] == ["facebook", "twitter", "pinterest", "google"]
    assert {l["class"] for l in links} == {"style-generic"}


@pytest.mark.asyncio
async def test_pinterest_link_includes_image(cache):
    (pin,) = await _links(cache, ContentItem("1"), ["pinterest"])
    assert "media=https%3A%2F%2Fexample.com%2Fa.jpg" in pin["link"]


@pytest.mark.asyncio
async def test_site_and_url_links(cache):
    (site,) = await _links(cache, Site(), ["linkedin"])
    assert site["url"] == "https://example.com"
    assert site["title"] == "Example"

    (ext,) = await _links(cache, ExternalURL("https://other.example/p"), ["google"], round_to=0)
    assert ext["url"] == "https://other.example/p"
    assert ext["count"] == "2"


@pytest.mark.asyncio
async def test_unknown_content_raises(cache):
    with pytest.raises(UnknownContent):
        await _links(cache, ContentItem("404"))


@pytest.mark.asyncio
async def test_unknown_service_gets_empty_link(cache):
    (link,) = await _links(cache, ContentItem("1"), ["myspace"])
    assert link["link"] == ""
    assert link["target"] == ""
    assert link["count"] == "0"


@pytest.mark.asyncio
async def test_link_hook_can_rewrite(settings, registry, fetcher, clock):
    hooks = Hooks(link=lambda link: {**link, "label": link["label"].upper()})
    cache = ShareCountCache(settings, MemoryStore(), fetcher, registry, hooks, clock=clock)
    (link,) = await _links(cache, ContentItem("1"), ["twitter"])
    assert link["label"] == "TWEET"


@pytest.mark.asyncio
async def test_render_html_escapes(cache):
    links = await _links(cache, ContentItem("3"), ["twitter"])
    markup = render_html(links, "after_content")
    assert markup.startswith('<div class="share-count-wrap after_content">')
    assert 'class="share-count-button style-generic twitter"' in markup
    assert '<span class="share-count">45</span>' in markup
    assert "&text=Old%20%26%20Gold" in markup.replace("&amp;", "&")
    assert "Old & Gold" not in markup


@pytest.mark.asyncio
async def test_image_falls_back_to_default_and_goes_through_hook(settings, registry, fetcher, clock):
    settings = replace(settings, default_image="https://example.com/logo.png")
    cache = ShareCountCache(settings, MemoryStore(), fetcher, registry, clock=clock)
    (fresh,) = await _links(cache, ContentItem("1"), ["pinterest"])
    (week,) = await _links(cache, ContentItem("2"), ["pinterest"])
    assert fresh["img"] == "https://example.com/a.jpg"
    assert week["img"] == "https://example.com/logo.png"

    seen = []

    def image(img, identity):
        seen.append(identity)
        return "https://cdn.example.com/x.png"

    cache = ShareCountCache(settings, MemoryStore(), fetcher, registry, Hooks(image=image), clock=clock)
    (pin,) = await _links(cache, Site(), ["pinterest"])
    assert pin["img"] == "https://cdn.example.com/x.png"
    assert "media=https%3A%2F%2Fcdn.example.com%2Fx.png" in pin["link"]
    assert seen == [Site()]


@pytest.mark.asyncio
async def test_site_url_hook_applies_to_links(settings, registry, fetcher, clock):
    hooks = Hooks(site_url=lambda url: "https://www.example.org")
    cache = ShareCountCache(settings, MemoryStore(), fetcher, registry, hooks, clock=clock)
    (link,) = await _links(cache, Site(), ["linkedin"])
    assert link["url"] == "https://www.example.org"
    assert fetcher.calls == ["https://www.example.org"]


@pytest.mark.asyncio
async def test_display_hook_wraps_markup(cache):
    links = await _links(cache, ContentItem("1"), ["twitter"])
    hooks = Hooks(display=lambda markup, location: f"<section data-at='{location}'>{markup}</section>")
    markup = render_html(links, "before_content", hooks)
    assert markup.startswith("<section data-at='before_content'><div class=\"share-count-wrap before_content\">")
    assert markup.endswith("</div></section>")
