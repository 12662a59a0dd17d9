from locatorkit.models import AncestorEntry, ElementDescriptor
from locatorkit.path_builder import build_css_path, build_xpath, css_segment, descriptor_css_path, descriptor_xpath


def test_css_segment_adds_classes_and_position_only_for_repeated_tags() -> None:
    assert css_segment(AncestorEntry(tag="div", classes=("card", "wide"))) == "div.card.wide"
    assert css_segment(AncestorEntry(tag="li", sibling_index=2, same_tag_count=1)) == "li"
    assert css_segment(AncestorEntry(tag="li", sibling_index=2, same_tag_count=4)) == "li:nth-child(2)"


def test_css_path_stops_at_first_anchor_id() -> None:
    chain = (
        AncestorEntry(tag="li", classes=("item",), sibling_index=2, same_tag_count=3),
        AncestorEntry(tag="ul", id="list"),
        AncestorEntry(tag="section", id="main"),
    )
    assert build_css_path(chain) == "#list > li.item:nth-child(2)"


def test_css_path_skips_unsafe_ids() -> None:
    chain = (
        AncestorEntry(tag="span"),
        AncestorEntry(tag="div", id="123-generated"),
        AncestorEntry(tag="main"),
    )
    assert build_css_path(chain) == "main > div > span"


def test_css_path_respects_max_depth_and_strict_ids() -> None:
    chain = (
        AncestorEntry(tag="span"),
        AncestorEntry(tag="div", id="headlessui-menu-1"),
        AncestorEntry(tag="main"),
    )
    assert build_css_path(chain) == "#headlessui-menu-1 > span"
    assert build_css_path(chain, strict_ids=True) == "main > div > span"
    assert build_css_path(chain, strict_ids=True, max_depth=2) == "div > span"


def test_xpath_lists_every_level_with_index() -> None:
    chain = (
        AncestorEntry(tag="span", sibling_index=3, same_tag_count=3),
        AncestorEntry(tag="div", id="list"),
    )
    assert build_xpath(chain) == "/div[1]/span[3]"
    assert build_xpath(()) == ""


def test_descriptor_paths_fall_back_to_tag_for_empty_chain() -> None:
    descriptor = ElementDescriptor(tag="body")
    assert descriptor_css_path(descriptor) == "body"
    assert descriptor_xpath(descriptor) == ""
