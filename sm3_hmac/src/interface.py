# 面向文本的薄封装：计算杂凑值/MAC后可选地输出Base64
# 输入为None时按空串处理

from .sm3 import sm3_digest
from .hmac_sm3 import sm3_hmac
from .base64_codec import encode, decode, STANDARD, URL_SAFE
from .utils import to_bytes


def sm3(data):
    """SM3杂凑值（32字节）"""
    return sm3_digest(to_bytes(data))


def sm3_base64(data):
    """SM3杂凑值的标准Base64文本"""
    return encode(sm3(data), STANDARD)


def sm3_base64_url(data):
    """SM3杂凑值的URL安全Base64文本（无填充）"""
    return encode(sm3(data), URL_SAFE)


def sm3hmac(data, key):
    """HMAC-SM3（32字节），注意参数顺序为 (数据, 密钥)"""
    return sm3_hmac(to_bytes(key), to_bytes(data))


def sm3hmac_base64(data, key):
    """HMAC-SM3的标准Base64文本"""
    return encode(sm3hmac(data, key), STANDARD)


def sm3hmac_base64_url(data, key):
    """HMAC-SM3的URL安全Base64文本（无填充）"""
    return encode(sm3hmac(data, key), URL_SAFE)


def base64_encode(data):
    """标准Base64编码"""
    return encode(to_bytes(data), STANDARD)


def base64_decode(text):
    """标准Base64解码，格式错误时抛出Base64DecodeError"""
    return decode(to_bytes(text), STANDARD)


def base64_encode_url(data):
    """URL安全Base64编码（无填充）"""
    return encode(to_bytes(data), URL_SAFE)


def base64_decode_url(text):
    """URL安全Base64解码，格式错误时抛出Base64DecodeError"""
    return decode(to_bytes(text), URL_SAFE)
