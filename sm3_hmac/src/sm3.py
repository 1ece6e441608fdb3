# SM3密码杂凑算法的流式Python实现
# 参考GM/T 0004-2012 / GB/T 32905-2016《SM3密码杂凑算法》

import struct

BLOCK_SIZE = 64  # 分组长度（字节）
DIGEST_SIZE = 32  # 杂凑值长度（字节）

# SM3常量定义
IV = (
    0x7380166F, 0x4914B2B9, 0x172442D7, 0xDA8A0600,
    0xA96F30BC, 0x163138AA, 0xE38DEE4D, 0xB0FB0E4E
)

T = (0x79CC4519,) * 16 + (0x7A879D8A,) * 48


def rotate_left(x, n):
    """循环左移n位"""
    n = n % 32
    return ((x << n) & 0xFFFFFFFF) | ((x >> (32 - n)) & 0xFFFFFFFF)


# 预计算轮常量 K[j] = T[j] <<< (j mod 32)
K = tuple(rotate_left(t, j) for j, t in enumerate(T))


def P0(x):
    """置换函数P0"""
    return x ^ rotate_left(x, 9) ^ rotate_left(x, 17)


def P1(x):
    """置换函数P1"""
    return x ^ rotate_left(x, 15) ^ rotate_left(x, 23)


def FF_j(x, y, z, j):
    """布尔函数FF_j"""
    if 0 <= j <= 15:
        return x ^ y ^ z
    else:  # 16 <= j <= 63
        return (x & y) | (x & z) | (y & z)


def GG_j(x, y, z, j):
    """布尔函数GG_j"""
    if 0 <= j <= 15:
        return x ^ y ^ z
    else:  # 16 <= j <= 63
        return (x & y) | ((~x & 0xFFFFFFFF) & z)


def fill_message(message):
    """消息填充：一次性对完整消息做填充，返回长度为64字节倍数的bytearray"""
    if isinstance(message, str):
        message = message.encode()
    length_bits = (len(message) * 8) & 0xFFFFFFFFFFFFFFFF

    padded = bytearray(message)
    padded.append(0x80)

    # 填充0，直到长度模64等于56
    padded.extend(b'\x00' * ((56 - len(padded)) % BLOCK_SIZE))

    # 64位大端消息长度(比特)
    padded.extend(struct.pack('>Q', length_bits))
    return padded


def message_extension(B):
    """消息扩展：16个大端字扩展为W[0..67]与W'[0..63]"""
    W = list(struct.unpack('>16I', B))

    for j in range(16, 68):
        val = P1(W[j - 16] ^ W[j - 9] ^ rotate_left(W[j - 3], 15))
        val ^= rotate_left(W[j - 13], 7)
        val ^= W[j - 6]
        W.append(val)

    W_prime = [W[j] ^ W[j + 4] for j in range(64)]

    return W, W_prime


def compression_function(V, B):
    """压缩函数CF，处理单个64字节分组，返回新的8字状态"""
    if len(B) != BLOCK_SIZE:
        raise ValueError("SM3压缩函数需要64字节的消息分组")

    W, W_prime = message_extension(B)

    A, B_reg, C, D, E, F, G, H = V

    for j in range(64):
        A_rot = rotate_left(A, 12)
        SS1 = rotate_left((A_rot + E + K[j]) & 0xFFFFFFFF, 7)
        SS2 = SS1 ^ A_rot
        TT1 = (FF_j(A, B_reg, C, j) + D + SS2 + W_prime[j]) & 0xFFFFFFFF
        TT2 = (GG_j(E, F, G, j) + H + SS1 + W[j]) & 0xFFFFFFFF

        D = C
        C = rotate_left(B_reg, 9)
        B_reg = A
        A = TT1
        H = G
        G = rotate_left(F, 19)
        F = E
        E = P0(TT2)

    return [
        A ^ V[0], B_reg ^ V[1], C ^ V[2], D ^ V[3],
        E ^ V[4], F ^ V[5], G ^ V[6], H ^ V[7]
    ]


def compress_blocks(V, data):
    """依次压缩data中的0个或多个完整分组"""
    view = memoryview(data).cast('B')
    if len(view) % BLOCK_SIZE:
        raise ValueError("数据长度必须是64字节的整数倍")

    for i in range(0, len(view), BLOCK_SIZE):
        V = compression_function(V, view[i:i + BLOCK_SIZE])
    return V


def _check_bytes(data):
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"SM3只接受字节数据，收到 {type(data).__name__}")


class SM3:
    """
    SM3流式杂凑状态

    可以多次调用update追加任意长度的数据，最后调用finish得到32字节杂凑值。
    finish之后状态被清零，不能继续使用。
    """

    name = "sm3"
    digest_size = DIGEST_SIZE
    block_size = BLOCK_SIZE

    def __init__(self, data=None):
        """
        初始化SM3状态

        参数:
            data: 可选的初始数据，等价于构造后立即调用update
        """
        self.state = list(IV)
        self.nblocks = 0  # 已压缩的完整分组数
        self.block = bytearray(BLOCK_SIZE)  # 未满一组的缓存数据
        self.num = 0  # 缓存中的有效字节数，始终小于64
        self.finished = False

        if data is not None:
            self.update(data)

    def _check_usable(self):
        if self.finished:
            raise ValueError("SM3状态已调用finish，需要重新创建")

    def update(self, data):
        """追加消息数据"""
        self._check_usable()
        _check_bytes(data)

        data = memoryview(data).cast('B')
        data_len = len(data)
        offset = 0

        # 先补满缓存中的不完整分组
        if self.num:
            left = BLOCK_SIZE - self.num
            if data_len < left:
                self.block[self.num:self.num + data_len] = data
                self.num += data_len
                return self
            self.block[self.num:] = data[:left]
            self.state = compress_blocks(self.state, self.block)
            self.nblocks += 1
            offset = left

        # 直接压缩剩余的完整分组
        blocks = (data_len - offset) // BLOCK_SIZE
        if blocks:
            end = offset + blocks * BLOCK_SIZE
            self.state = compress_blocks(self.state, data[offset:end])
            self.nblocks += blocks
            offset = end

        # 保存不足一组的尾部
        self.num = data_len - offset
        self.block[:self.num] = data[offset:]
        return self

    def finish(self):
        """填充并输出32字节杂凑值，之后状态不可再用"""
        self._check_usable()

        num = self.num
        block = self.block
        block[num] = 0x80

        if num <= BLOCK_SIZE - 9:
            block[num + 1:56] = bytes(55 - num)
        else:
            # 剩余空间放不下长度字段，先压缩当前分组
            block[num + 1:] = bytes(BLOCK_SIZE - num - 1)
            self.state = compress_blocks(self.state, block)
            block[:56] = bytes(56)

        length_bits = ((self.nblocks * BLOCK_SIZE + num) * 8) & 0xFFFFFFFFFFFFFFFF
        block[56:] = struct.pack('>Q', length_bits)
        self.state = compress_blocks(self.state, block)

        digest = struct.pack('>8I', *self.state)
        self._wipe()
        return digest

    def copy(self):
        """复制当前未完成的状态，用于对公共前缀做多次杂凑"""
        self._check_usable()
        other = SM3()
        other.state = list(self.state)
        other.nblocks = self.nblocks
        other.block = bytearray(self.block)
        other.num = self.num
        return other

    def _wipe(self):
        self.state = [0] * 8
        self.block[:] = bytes(BLOCK_SIZE)
        self.nblocks = 0
        self.num = 0
        self.finished = True


def sm3_digest(data):
    """计算SM3杂凑值，返回32字节"""
    return SM3(data).finish()


def sm3_hash(message):
    """计算SM3哈希值，返回十六进制字符串"""
    if isinstance(message, str):
        message = message.encode()
    return sm3_digest(message).hex()
