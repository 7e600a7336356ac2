from __future__ import annotations

from playwright.sync_api import Error as PlaywrightError

from conftest import FakeElement, FakePage
from cardmedia.input.instruction import Supplier, parse_instruction
from cardmedia.output.providers import (
    INFOBOX_SELECTOR,
    STOCK_PHOTO_SELECTOR,
    Status,
    dictionary_url_for_word,
    fetch_direct,
    fetch_from_dictionary,
    fetch_from_stock_photo,
    latest_attribution,
    ProviderResult,
    run_providers,
    strategies_for,
    upsize_thumbnail,
)

THUMB = "//upload.wikimedia.org/wikipedia/commons/thumb/1/1a/Cat.jpg/220px-Cat.jpg"


def _prepare(config, fields):
    instruction = parse_instruction(fields)
    return instruction, instruction.asset_reference(config.out_dir, config.media_dir)


def test_upsize_thumbnail():
    assert upsize_thumbnail(THUMB).endswith("/1000px-Cat.jpg")
    assert upsize_thumbnail("//example.com/cat.jpg") == "//example.com/cat.jpg"


def test_dictionary_url_encodes_word():
    assert dictionary_url_for_word("ねこ") == "https://ja.wikipedia.org/wiki/%E3%81%AD%E3%81%93"


def test_dictionary_downloads_upsized_infobox_image(config, downloads):
    page = FakePage({INFOBOX_SELECTOR: [FakeElement(THUMB)]})
    instruction, asset = _prepare(config, ["ねこ", "猫"])

    result = fetch_from_dictionary(page, instruction, asset, config)

    assert result.status is Status.OK
    assert downloads == ["https://upload.wikimedia.org/wikipedia/commons/thumb/1/1a/Cat.jpg/1000px-Cat.jpg"]
    url = dictionary_url_for_word("ねこ")
    assert page.calls[0] == ("goto", url)
    assert page.calls[1] == ("wait_for_selector", INFOBOX_SELECTOR, 10000)
    assert result.attribution == f'Image from <a href="{url}">Wikipedia</a><br>'


def test_dictionary_disposes_infobox_handle(config, downloads):
    entry = FakeElement(THUMB)
    page = FakePage({INFOBOX_SELECTOR: [entry]})
    instruction, asset = _prepare(config, ["ねこ", "猫"])

    fetch_from_dictionary(page, instruction, asset, config)

    assert entry.disposed


def test_dictionary_disposes_handle_when_evaluate_fails(config, downloads):
    entry = FakeElement(THUMB)
    page = FakePage({INFOBOX_SELECTOR: [entry]})

    def broken_evaluate(expression, arg=None):
        raise PlaywrightError("Execution context was destroyed")

    page.evaluate = broken_evaluate
    instruction, asset = _prepare(config, ["ねこ", "猫"])

    results = run_providers(page, instruction, asset, config)

    assert results[0].status is Status.FAIL
    assert entry.disposed
    assert downloads == []


def test_dictionary_without_infobox_skips(config, downloads):
    page = FakePage()
    instruction, asset = _prepare(config, ["ねこ", "猫"])

    result = fetch_from_dictionary(page, instruction, asset, config)

    assert result.status is Status.SKIP
    assert result.attribution is None
    assert downloads == []


def test_dictionary_download_failure(config, failing_downloads):
    page = FakePage({INFOBOX_SELECTOR: [FakeElement(THUMB)]})
    instruction, asset = _prepare(config, ["ねこ", "猫"])

    result = fetch_from_dictionary(page, instruction, asset, config)

    assert result.status is Status.FAIL
    assert result.attribution is None
    assert "Connection refused" in result.reason


def test_stock_photo_uses_second_image_and_disposes_all(config, downloads):
    images = [
        FakeElement("https://images.unsplash.com/profile.jpg"),
        FakeElement("https://images.unsplash.com/photo-1?auto=format&w=1000"),
        FakeElement("https://images.unsplash.com/related.jpg"),
    ]
    page = FakePage({STOCK_PHOTO_SELECTOR: images})
    instruction, asset = _prepare(config, ["fox", "狐", "unsplash:abc123"])

    result = fetch_from_stock_photo(page, instruction, asset, config)

    assert page.calls[0] == ("goto", "https://unsplash.com/photos/abc123")
    assert downloads == ["https://images.unsplash.com/photo-1?fm=jpg&w=1000"]
    assert result.status is Status.OK
    assert result.attribution == 'Image from <a href="https://unsplash.com/photos/abc123">Unsplash</a><br>'
    assert all(img.disposed for img in images)


def test_stock_photo_with_single_image_skips(config, downloads):
    images = [FakeElement("https://images.unsplash.com/profile.jpg")]
    page = FakePage({STOCK_PHOTO_SELECTOR: images})
    instruction, asset = _prepare(config, ["fox", "狐", "unsplash:abc123"])

    result = fetch_from_stock_photo(page, instruction, asset, config)

    assert result.status is Status.SKIP
    assert downloads == []
    assert images[0].disposed


def test_direct_wikipedia_link_is_credited(config, downloads):
    instruction, asset = _prepare(config, ["dog", "犬", "direct:example.com/wikipedia/dog.png:dog1"])

    result = fetch_direct(FakePage(), instruction, asset, config)

    assert downloads == ["https://example.com/wikipedia/dog.png"]
    assert result.status is Status.OK
    assert result.attribution == 'Image from <a href="example.com/wikipedia/dog.png">Wikipedia</a>'


def test_direct_other_host_has_no_credit(config, downloads):
    instruction, asset = _prepare(config, ["dog", "犬", "direct:example.com/dog.png"])

    result = fetch_direct(FakePage(), instruction, asset, config)

    assert result.status is Status.OK
    assert result.attribution == ""


def test_direct_failure_keeps_credit(config, failing_downloads):
    instruction, asset = _prepare(config, ["dog", "犬", "direct:upload.wikimedia.org/dog.png"])

    result = fetch_direct(FakePage(), instruction, asset, config)

    assert result.status is Status.FAIL
    assert result.attribution == 'Image from <a href="upload.wikimedia.org/dog.png">Wikipedia</a>'


def test_strategies_for_suppliers():
    assert [name for name, _ in strategies_for(Supplier.DICTIONARY)] == ["dictionary"]
    assert [name for name, _ in strategies_for(Supplier.DIRECT)] == ["direct"]
    assert [name for name, _ in strategies_for(Supplier.UNSPLASH)] == ["unsplash"]
    for supplier in (Supplier.LOCAL, Supplier.MEDIA, Supplier.NONE):
        assert strategies_for(supplier) == []


def test_run_providers_turns_page_errors_into_failures(config, downloads, capsys):
    page = FakePage(fail_on_goto=PlaywrightError("net::ERR_NAME_NOT_RESOLVED"))
    instruction, asset = _prepare(config, ["ねこ", "猫"])

    results = run_providers(page, instruction, asset, config)

    assert [(r.provider, r.status) for r in results] == [("dictionary", Status.FAIL)]
    assert "net::ERR_NAME_NOT_RESOLVED" in capsys.readouterr().err
    assert downloads == []


def test_latest_attribution_ignores_empty():
    results = [
        ProviderResult("dictionary", Status.OK, attribution="a"),
        ProviderResult("direct", Status.OK, attribution=""),
    ]
    assert latest_attribution(results) == "a"
    assert latest_attribution([]) == ""
