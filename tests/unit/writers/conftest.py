"""Fixtures shared by the document writer tests."""

from unittest.mock import patch

import pytest
from reportlab.pdfgen import canvas


@pytest.fixture
def drawn_text():
    """Collect every string drawn on a reportlab canvas during the test.

    The fixture value is a callable returning the strings drawn so far.
    """
    with patch.object(
        canvas.Canvas, "drawString", autospec=True
    ) as draw_string, patch.object(
        canvas.Canvas, "drawRightString", autospec=True
    ) as draw_right:

        def strings():
            calls = draw_string.call_args_list + draw_right.call_args_list
            return [c.args[3] for c in calls]

        yield strings
