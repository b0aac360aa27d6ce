"""Tests for previous/next link resolution."""

from dataclasses import replace
from pathlib import Path

import pytest

from docnav.config import SiteConfig
from docnav.navigation import (
    Group,
    Link,
    apply_prev_next_link_config,
    build_page_navigation,
    find_route,
    get_prev_next_links,
)
from docnav.routes import route_from_data, routes_from_data
from docnav.types import PrevNextOverride

A = Link(label="A", href="/a/")
B = Link(label="B", href="/b/", attrs={"class": "b"})
C = Link(label="C", href="/c/")


def sidebar_with_current(label: str) -> list:
    links = [
        replace(link, is_current=link.label == label) for link in (A, B, C)
    ]
    return [links[0], Group(label="Group", entries=links[1:])]


class TestGetPrevNextLinks:
    def test_middle_page(self):
        prev, next_ = get_prev_next_links(sidebar_with_current("B"))

        assert prev is not None and prev.label == "A"
        assert next_ is not None and next_.label == "C"

    def test_disabled_next(self):
        links = get_prev_next_links(sidebar_with_current("B"), True, next=False)

        assert links.prev is not None and links.prev.label == "A"
        assert links.next is None

    def test_first_page(self):
        links = get_prev_next_links(sidebar_with_current("A"))

        assert links.prev is None
        assert links.next is not None and links.next.label == "B"

    def test_last_page(self):
        links = get_prev_next_links(sidebar_with_current("C"))

        assert links.prev is not None and links.prev.label == "B"
        assert links.next is None

    def test_no_current_page(self):
        links = get_prev_next_links(sidebar_with_current("missing"))

        assert links.prev is None
        assert links.next is None

    def test_empty_sidebar(self):
        assert get_prev_next_links([]) == (None, None)

    def test_pagination_disabled(self):
        links = get_prev_next_links(sidebar_with_current("B"), False)

        assert links == (None, None)

    def test_enabled_override_beats_global_setting(self):
        links = get_prev_next_links(sidebar_with_current("B"), False, prev=True)

        assert links.prev is not None and links.prev.label == "A"
        assert links.next is None

    def test_malformed_override_follows_disabled_pagination(self):
        route = route_from_data("b.md", {"title": "B", "next": {"label": 5}})

        links = get_prev_next_links(
            sidebar_with_current("B"), False, prev=route.prev, next=route.next
        )

        assert links == (None, None)

    def test_malformed_override_keeps_link_attrs(self):
        route = route_from_data("a.md", {"title": "A", "next": {"link": 1}})

        links = get_prev_next_links(sidebar_with_current("A"), True, next=route.next)

        assert links.next == B

    def test_first_current_entry_wins(self):
        sidebar = [
            Link(label="A", href="/a/"),
            Link(label="B", href="/b/", is_current=True),
            Link(label="C", href="/c/"),
            Link(label="B again", href="/b/", is_current=True),
            Link(label="D", href="/d/"),
        ]

        links = get_prev_next_links(sidebar)

        assert links.prev is not None and links.prev.label == "A"
        assert links.next is not None and links.next.label == "C"


class TestApplyPrevNextLinkConfig:
    def test_false_removes_link(self):
        assert apply_prev_next_link_config(A, True, False) is None

    def test_true_keeps_link(self):
        assert apply_prev_next_link_config(A, False, True) is A
        assert apply_prev_next_link_config(None, True, True) is None

    def test_label_string(self):
        link = apply_prev_next_link_config(B, True, "Go back")

        assert link is not None
        assert link.label == "Go back"
        assert link.href == "/b/"
        # Plain label overrides keep attributes
        assert link.attrs == {"class": "b"}

    def test_label_string_without_link(self):
        assert apply_prev_next_link_config(None, True, "Go back") is None

    @pytest.mark.parametrize(
        ("override", "label", "href"),
        [
            (PrevNextOverride(label="Custom"), "Custom", "/b/"),
            (PrevNextOverride(link="/elsewhere/"), "B", "/elsewhere/"),
            (PrevNextOverride(link="/x/", label="X"), "X", "/x/"),
            (PrevNextOverride(), "B", "/b/"),
        ],
    )
    def test_override_merges_with_link(self, override, label, href):
        link = apply_prev_next_link_config(B, True, override)

        assert link is not None
        assert (link.label, link.href) == (label, href)
        assert link.attrs == {}

    def test_override_object_ignores_global_setting(self):
        link = apply_prev_next_link_config(B, False, PrevNextOverride(label="Custom"))

        assert link is not None and link.label == "Custom"

    def test_override_creates_link(self):
        link = apply_prev_next_link_config(
            None, True, PrevNextOverride(link="/extra/", label="Extra")
        )

        assert link is not None
        assert link.label == "Extra"
        assert link.href == "/extra/"
        assert link.attrs == {}

    def test_override_creates_link_with_base(self):
        link = apply_prev_next_link_config(
            None, True, PrevNextOverride(link="extra", label="Extra"), base="/docs/"
        )

        assert link is not None and link.href == "/docs/extra/"

    def test_created_link_keeps_absolute_href(self):
        link = apply_prev_next_link_config(
            None, True, PrevNextOverride(link="https://example.com", label="Out")
        )

        assert link is not None and link.href == "https://example.com"

    def test_partial_override_without_link(self):
        assert apply_prev_next_link_config(None, True, PrevNextOverride(label="X")) is None
        assert apply_prev_next_link_config(None, True, PrevNextOverride(link="/x/")) is None

    def test_no_override_follows_global_setting(self):
        assert apply_prev_next_link_config(A, True, None) is A
        assert apply_prev_next_link_config(A, False, None) is None


class TestBuildPageNavigation:
    ROUTES = routes_from_data(
        [
            {"id": "index.md", "title": "Home", "sidebar": {"order": 0}},
            {"id": "guides/intro.md", "title": "Intro", "sidebar": {"order": 1}},
            {
                "id": "guides/setup.md",
                "title": "Setup",
                "sidebar": {"order": 2},
                "prev": {"label": "Start here"},
                "next": {"link": "/support/", "label": "Get help"},
            },
        ]
    )

    def config(self, **kwargs) -> SiteConfig:
        return SiteConfig(site_name="Test", docs_dir=Path("docs"), **kwargs)

    def test_uses_page_overrides(self):
        page = build_page_navigation("/guides/setup", self.ROUTES, self.config())

        assert page.route is self.ROUTES[2]
        assert page.pathname == "/guides/setup/"
        assert page.prev is not None
        assert (page.prev.label, page.prev.href) == ("Start here", "/guides/intro/")
        assert page.next is not None
        assert (page.next.label, page.next.href) == ("Get help", "/support/")

    def test_unknown_page(self):
        page = build_page_navigation("/nope/", self.ROUTES, self.config())

        assert page.route is None
        assert (page.prev, page.next) == (None, None)

    def test_pagination_disabled(self):
        page = build_page_navigation(
            "/guides/intro/", self.ROUTES, self.config(pagination=False)
        )

        assert (page.prev, page.next) == (None, None)

    def test_with_base(self):
        page = build_page_navigation("/docs/", self.ROUTES, self.config(base="/docs/"))

        assert page.route is self.ROUTES[0]
        assert page.prev is None
        assert page.next is not None and page.next.href == "/docs/guides/intro/"

    def test_find_route(self):
        assert find_route(self.ROUTES, "/") is self.ROUTES[0]
        assert find_route(self.ROUTES, "/guides/intro") is self.ROUTES[1]
        assert find_route(self.ROUTES, "/guides/") is None

    def test_to_dict(self):
        page = build_page_navigation("/", self.ROUTES, self.config())

        data = page.to_dict()

        assert data["pathname"] == "/"
        assert data["prev"] is None
        assert data["next"]["href"] == "/guides/intro/"
        assert len(data["sidebar"]) == 2
