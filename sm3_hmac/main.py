import argparse
import hmac
import sys
import time

from gmssl import sm3 as gmssl_sm3, func

from sm3_hmac.src.sm3 import SM3, sm3_digest, sm3_hash
from sm3_hmac.src.hmac_sm3 import SM3_HMAC, sm3_hmac
from sm3_hmac.src.base64_codec import encode, decode, STANDARD, URL_SAFE
from sm3_hmac.src.utils import to_bytes, flip_bit, bit_difference

# 标准测试向量（GB/T 32905-2016 附录A）
TEST_VECTORS = [
    (b"", "1ab21d8355cfa17f8e61194831e81a8f22bec8c728fefb747ed035eb5082aa2b"),
    (b"abc", "66c7f0f462eeedd9d1f2d46bdc10e4e24167c4875cf2f7a2297da02b8f4ba8e0"),
    (b"abcd" * 16, "debe9ff92275b8a138604889c18e5a4d6fdb70e5387e5765293dcba39c0c5732"),
]

# HMAC-SM3测试向量（GB/T 15852.2 C.2，密钥1）
HMAC_KEY = bytes.fromhex("00112233445566778899AABBCCDDEEFF")
HMAC_VECTORS = [
    (b"abc", "0933617a88d312f6f9fb4b5f200e31a64d655e92f7fa2a43f55dfeeb8ab6788d"),
    (b"message digest", "9c9a22e8b5797b82cff9baba56893cc1d75811c334d198f3af43401740b824f7"),
]


def render(raw, use_base64=False, url=False):
    """按命令行选项输出十六进制或Base64文本"""
    if url:
        return encode(raw, URL_SAFE)
    if use_base64:
        return encode(raw, STANDARD)
    return raw.hex()


def parse_expected(text, use_base64=False, url=False):
    """把--check给出的期望值还原为字节，格式与输出选项一致"""
    if url:
        return decode(text, URL_SAFE)
    if use_base64:
        return decode(text, STANDARD)
    return bytes.fromhex(text)


def hash_file(path, key=None, chunk_size=64 * 1024):
    """分块读取文件计算SM3或HMAC-SM3"""
    ctx = SM3() if key is None else SM3_HMAC(key)
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            ctx.update(chunk)
    return ctx.finish()


def run_demo():
    """验证测试向量，并与gmssl的实现对比"""
    ok = True
    print("SM3 测试向量验证:")
    for msg, expected in TEST_VECTORS:
        result = sm3_hash(msg)
        reference = gmssl_sm3.sm3_hash(func.bytes_to_list(msg))
        passed = result == expected == reference
        ok &= passed
        print(f"消息: {msg[:16]!r}{'...' if len(msg) > 16 else ''}")
        print(f"哈希值: {result}")
        print(f"预期值: {expected}")
        print(f"验证: {'成功' if passed else '失败'}\n")

    print("HMAC-SM3 测试向量验证:")
    for msg, expected in HMAC_VECTORS:
        result = sm3_hmac(HMAC_KEY, msg).hex()
        passed = result == expected
        ok &= passed
        print(f"消息: {msg!r}")
        print(f"MAC: {result}")
        print(f"验证: {'成功' if passed else '失败'}\n")

    # 雪崩效应：翻转消息一个比特
    msg = b"lqlq666lqlq946"
    d1 = sm3_digest(msg)
    d2 = sm3_digest(flip_bit(msg, 0))
    print(f"翻转1比特后摘要变化: {bit_difference(d1, d2)} / 256 比特")
    print(f"Base64:     {encode(d1, STANDARD)}")
    print(f"Base64 URL: {encode(d1, URL_SAFE)}")
    return ok


def run_benchmark():
    """性能测试"""
    test_sizes = [1024, 1024 * 10, 1024 * 100, 1024 * 1024]  # 1KB, 10KB, 100KB, 1MB
    iterations = [100, 10, 2, 1]

    print("性能测试:")
    for size, iters in zip(test_sizes, iterations):
        data = b'a' * size
        start = time.perf_counter()
        for _ in range(iters):
            sm3_digest(data)
        elapsed = time.perf_counter() - start
        throughput = (size * iters) / (1024 * 1024 * elapsed) if elapsed > 0 else 0
        print(f"数据大小: {size / 1024:.1f}KB, 迭代次数: {iters}, 耗时: {elapsed:.6f}秒, 吞吐量: {throughput:.2f}MB/s")


def main(argv=None):
    parser = argparse.ArgumentParser(description="SM3 / HMAC-SM3 命令行工具")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("-s", "--string", help="计算字符串的SM3（UTF-8编码）")
    source.add_argument("-f", "--file", help="计算文件的SM3")
    source.add_argument("--demo", action="store_true", help="验证测试向量")
    source.add_argument("--benchmark", action="store_true", help="性能测试")
    parser.add_argument("-k", "--key", help="HMAC密钥（UTF-8编码），指定后计算HMAC-SM3")
    parser.add_argument("--base64", action="store_true", help="以标准Base64输出")
    parser.add_argument("--url", action="store_true", help="以URL安全Base64输出（无填充）")
    parser.add_argument("--check", metavar="EXPECTED", help="与期望值比较（格式与输出选项一致）")
    args = parser.parse_args(argv)

    key = None if args.key is None else to_bytes(args.key)

    if args.demo:
        return 0 if run_demo() else 1
    if args.benchmark:
        run_benchmark()
        return 0

    if args.file:
        try:
            raw = hash_file(args.file, key)
        except OSError as e:
            sys.stderr.write(f"读取文件 '{args.file}' 失败: {e}\n")
            return 1
    elif args.string is not None:
        data = to_bytes(args.string)
        raw = sm3_digest(data) if key is None else sm3_hmac(key, data)
    else:
        parser.print_help()
        return 1

    if args.check is not None:
        try:
            expected = parse_expected(args.check, args.base64, args.url)
        except ValueError as e:
            # Base64DecodeError 或 十六进制格式错误
            sys.stderr.write(f"期望值格式错误: {e}\n")
            return 1
        passed = hmac.compare_digest(raw, expected)
        print(f"验证: {'成功' if passed else '失败'}")
        return 0 if passed else 1

    print(render(raw, args.base64, args.url))
    return 0


if __name__ == "__main__":
    sys.exit(main())
