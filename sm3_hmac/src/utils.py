import numpy as np


def to_bytes(value):
    """将输入转换为字节串，None视为空串，str按UTF-8编码，数字按十进制文本处理"""
    if value is None:
        return b''
    if isinstance(value, str):
        return value.encode('utf-8')
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value).encode('ascii')
    raise TypeError(f"需要字符串或字节数据，收到 {type(value).__name__}")


def bytes_to_bits(data):
    """字节串展开为比特数组（大端位序）"""
    return np.unpackbits(np.frombuffer(bytes(data), dtype=np.uint8))


def bit_difference(a, b):
    """计算两个等长杂凑值之间不同的比特数"""
    if len(a) != len(b):
        raise ValueError("比较的两个杂凑值长度必须相同")
    return int(np.count_nonzero(bytes_to_bits(a) != bytes_to_bits(b)))


def avalanche_ratio(a, b):
    """不同比特所占比例（雪崩效应评估，理想值约为0.5）"""
    if len(a) == 0:
        return 0.0
    return bit_difference(a, b) / (len(a) * 8)


def flip_bit(data, bit_index):
    """翻转data中第bit_index个比特（从最高位开始计数）"""
    if not 0 <= bit_index < len(data) * 8:
        raise ValueError(f"比特位置 {bit_index} 超出范围")
    flipped = bytearray(data)
    flipped[bit_index // 8] ^= 0x80 >> (bit_index % 8)
    return bytes(flipped)
