import hashlib
from typing import Optional

MOD = 2 ** 32


def make_seed(*parts: str, mod: int = MOD) -> int:
    h = hashlib.sha256("||".join(map(str, parts)).encode()).hexdigest()
    return int(h[:8], 16) % mod


def seed_for_frame(base_seed: Optional[int], frame_index: int, namespace: str = "frame") -> Optional[int]:
    # Unseeded engines stay unseeded per frame
    if base_seed is None:
        return None
    return make_seed(namespace, base_seed, frame_index)
