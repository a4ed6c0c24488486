"""Path convertor for short ids.

Routes declared as ``/{uuid:shortid}`` only match 20 characters from
``[0-9a-v]``; any other segment falls through to the framework's 404.
"""

from starlette.convertors import Convertor, register_url_convertor

from ..utils.shortener import SHORT_ID_PATTERN


class ShortIDConvertor(Convertor):
    regex = SHORT_ID_PATTERN

    def convert(self, value: str) -> str:
        return value

    def to_string(self, value: str) -> str:
        return str(value)


register_url_convertor("shortid", ShortIDConvertor())
