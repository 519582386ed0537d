"""バケット割り当て用ハッシュ関数"""

from __future__ import annotations

import mmh3

VARIANT_HASH_SEED = 86028157


def normalized_value(
    identifier: str,
    group_id: str,
    normalizer: int = 100,
    seed: int = 0,
) -> int:
    """identifier を 1 以上 normalizer 以下の整数バケットに写像する。

    他 SDK と同じく "<group_id>:<identifier>" の MurmurHash3 (x86, 32bit,
    符号なし) を normalizer で割った余りに 1 を足す。

    Args:
        identifier: スティッキネス値（ユーザー ID など）
        group_id: トグルごとのソルト
        normalizer: バケット数（1 以上）
        seed: MurmurHash3 のシード

    Returns:
        [1, normalizer] の整数
    """
    hash_value = mmh3.hash(f"{group_id}:{identifier}", seed, signed=False)
    return hash_value % normalizer + 1
