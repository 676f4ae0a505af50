from ghe_lib.strings import Strings


def test_interpolates_named_placeholders() -> None:
    strings = Strings("en")

    text = strings.t("repos", "repo_detail_title", owner="octo", repo="hello")

    assert text == "Repository 'octo/hello' details"


def test_missing_korean_entry_falls_back_to_english() -> None:
    strings = Strings("ko")

    assert strings.t("repos", "no_description") == "설명 없음"
    assert strings.t("pulls", "pr_detail_title", number=7) == "Pull request #7 details"


def test_unknown_key_returns_key_and_unknown_placeholder_survives() -> None:
    strings = Strings("en")

    assert strings.t("repos", "does_not_exist") == "does_not_exist"
    assert strings.t("common", "port_in_use", port=3000) == "Port 3000 is already in use, trying {next_port}..."


def test_unsupported_language_uses_english() -> None:
    assert Strings("xx").language == "en"
