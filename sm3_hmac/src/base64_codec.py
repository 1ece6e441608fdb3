# Base64编解码，用于把杂凑值/MAC输出为文本
# 标准字母表输出带'='填充，URL安全字母表('-'、'_')输出不带填充

import base64

STANDARD = "standard"
URL_SAFE = "url_safe"

_ALPHABETS = {
    STANDARD: "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/",
    URL_SAFE: "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_",
}
_ALPHABET_SETS = {name: frozenset(chars) for name, chars in _ALPHABETS.items()}


class Base64DecodeError(ValueError):
    """Base64文本格式错误（非法字符或非法长度）"""


def _check_alphabet(alphabet):
    if alphabet not in _ALPHABETS:
        raise ValueError(f"未知的Base64字母表: {alphabet!r}")


def encoded_length(n):
    """n字节数据的标准编码长度"""
    return (n + 2) // 3 * 4


def decoded_length(n):
    """n个字符最多能解码出的字节数"""
    return (n + 3) // 4 * 3


def encode(data, alphabet=STANDARD):
    """将字节数据编码为Base64文本"""
    _check_alphabet(alphabet)
    data = bytes(data)

    if alphabet == URL_SAFE:
        return base64.urlsafe_b64encode(data).rstrip(b'=').decode('ascii')
    return base64.b64encode(data).decode('ascii')


def decode(text, alphabet=STANDARD):
    """
    将Base64文本解码为字节数据

    参数:
        text: str或bytes，允许省略末尾的'='填充
        alphabet: STANDARD或URL_SAFE

    异常:
        Base64DecodeError: 含字母表外字符、'='出现在数据中间、
                           填充超出最后一组所需或有效长度模4余1
    """
    _check_alphabet(alphabet)
    if isinstance(text, (bytes, bytearray, memoryview)):
        try:
            text = bytes(text).decode('ascii')
        except UnicodeDecodeError as e:
            raise Base64DecodeError(f"第{e.start}个字节不是合法的Base64字符") from e

    # 有效数据截止到第一个'='，之后只能是填充
    body_len = text.find('=')
    if body_len < 0:
        body_len = len(text)
    body, padding = text[:body_len], text[body_len:]

    valid = _ALPHABET_SETS[alphabet]
    for i, ch in enumerate(body):
        if ch not in valid:
            raise Base64DecodeError(f"第{i}个字符 {ch!r} 不在Base64字母表中")

    if padding.strip('='):
        raise Base64DecodeError("'='填充之后不能再出现数据")
    if len(body) % 4 == 1:
        raise Base64DecodeError(f"Base64有效长度{len(body)}非法（模4余1）")
    # 填充只能补齐最后一组，可以省略但不能多
    if len(padding) > -len(body) % 4:
        raise Base64DecodeError(f"填充字符过多: {len(padding)}个'='")

    padded = body + '=' * (-len(body) % 4)
    if alphabet == URL_SAFE:
        return base64.urlsafe_b64decode(padded)
    return base64.b64decode(padded, validate=True)
