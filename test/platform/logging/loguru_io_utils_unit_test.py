import pytest

from src.platform.logging.loguru_io_config import MAX_CONTENT_LENGTH
from src.platform.logging.loguru_io_utils import (
    mask_sensitive,
    should_mask_keyword,
    truncate_content,
)


@pytest.mark.unit
class TestMaskSensitive:
    @pytest.mark.parametrize(
        'raw, expected',
        [
            ("login(password='hunter2', user='ana')", "login(password='********', user='ana')"),
            ("{'token': 'abc.def', 'room_id': 3}", "{'token': '********', 'room_id': 3}"),
            ('Authorization=Bearer', "Authorization='********'"),
        ],
    )
    def test_masks_sensitive_values(self, raw: str, expected: str) -> None:
        assert mask_sensitive(raw) == expected

    def test_leaves_plain_data_untouched(self) -> None:
        data = {'room_id': 3, 'user_id': 1}

        assert mask_sensitive(data) is data


@pytest.mark.unit
class TestShouldMaskKeyword:
    def test_sensitive_keyword_is_masked_case_insensitively(self) -> None:
        assert should_mask_keyword('SECRET', 'x') == '********'

    def test_other_keyword_keeps_value(self) -> None:
        assert should_mask_keyword('room_id', 3) == 3


@pytest.mark.unit
class TestTruncateContent:
    def test_short_content_is_returned_as_is(self) -> None:
        assert truncate_content('short') == 'short'

    def test_long_content_is_cut_with_marker(self) -> None:
        content = 'x' * (MAX_CONTENT_LENGTH + 25)

        result = truncate_content(content)

        assert result.startswith('x' * MAX_CONTENT_LENGTH)
        assert result.endswith('...(truncated 25 chars)')
