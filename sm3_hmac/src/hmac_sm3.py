# 基于SM3的HMAC实现
# HMAC_k(m) = H((k ^ opad) || H((k ^ ipad) || m))

from .sm3 import SM3, BLOCK_SIZE, DIGEST_SIZE, sm3_digest

IPAD = 0x36
OPAD = 0x5C
MAC_SIZE = DIGEST_SIZE


class SM3_HMAC:
    """
    HMAC-SM3流式计算

    与SM3一样支持多次update，finish输出32字节MAC后清零所有密钥相关数据。
    """

    def __init__(self, key):
        """
        初始化HMAC-SM3

        参数:
            key: 任意长度的密钥字节串，超过64字节时先做SM3压缩
        """
        if not isinstance(key, (bytes, bytearray, memoryview)):
            raise TypeError(f"HMAC密钥必须是字节数据，收到 {type(key).__name__}")

        key = bytes(key)
        if len(key) > BLOCK_SIZE:
            key = sm3_digest(key)

        # 密钥补零到分组长度，并与ipad异或
        self.key_block = bytearray(BLOCK_SIZE)
        self.key_block[:len(key)] = key
        for i in range(BLOCK_SIZE):
            self.key_block[i] ^= IPAD

        self.sm3 = SM3(self.key_block)
        self.finished = False

    def update(self, data):
        """追加消息数据"""
        if self.finished:
            raise ValueError("HMAC状态已调用finish，需要重新创建")
        self.sm3.update(data)
        return self

    def finish(self):
        """输出32字节MAC，之后状态不可再用"""
        if self.finished:
            raise ValueError("HMAC状态已调用finish，需要重新创建")

        inner_digest = self.sm3.finish()

        # key ^ ipad 转换为 key ^ opad
        for i in range(BLOCK_SIZE):
            self.key_block[i] ^= IPAD ^ OPAD

        outer = SM3(self.key_block)
        outer.update(inner_digest)
        mac = outer.finish()

        self.key_block[:] = bytes(BLOCK_SIZE)
        self.finished = True
        return mac

    def copy(self):
        """复制当前未完成的HMAC状态"""
        if self.finished:
            raise ValueError("HMAC状态已调用finish，需要重新创建")
        other = SM3_HMAC.__new__(SM3_HMAC)
        other.key_block = bytearray(self.key_block)
        other.sm3 = self.sm3.copy()
        other.finished = False
        return other


def sm3_hmac(key, data):
    """计算HMAC-SM3，返回32字节MAC"""
    return SM3_HMAC(key).update(data).finish()
