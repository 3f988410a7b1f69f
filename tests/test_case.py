from messaging_api.utils import camelcase, camelcase_keys


def test_camelcase_words_and_digits() -> None:
    assert camelcase("quick_reply") == "quickReply"
    assert camelcase("original_content_url") == "originalContentUrl"
    assert camelcase("image_1024") == "image1024"
    assert camelcase("has_2fa") == "has2fa"
    assert camelcase("alreadyCamel") == "alreadyCamel"


def test_keys_shallow_by_default() -> None:
    converted = camelcase_keys({"alt_text": "x", "base_size": {"image_width": 1}})
    assert converted == {"altText": "x", "baseSize": {"image_width": 1}}


def test_keys_deep() -> None:
    converted = camelcase_keys({"user_ids": [{"display_name": "a"}]}, deep=True)
    assert converted == {"userIds": [{"displayName": "a"}]}
