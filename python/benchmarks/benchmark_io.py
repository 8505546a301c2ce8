import argparse
import io
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np
import scipy.io as sio
import scipy.sparse as sp

import mtxio

# ---------- Builders ----------


def build_scipy_coo(
    m: int, n: int, density: float, seed: int, dtype: np.dtype
) -> Tuple[sp.coo_matrix, int]:
    rs = np.random.RandomState(seed)
    data_rvs = lambda s: rs.standard_normal(s).astype(dtype)
    A_coo = sp.random(m, n, density=density, format="coo", random_state=rs, data_rvs=data_rvs)
    return A_coo, int(A_coo.nnz)


def build_mtxio_sparse_from_scipy(A_scipy: sp.coo_matrix) -> mtxio.Sparse:
    return mtxio.Sparse(A_scipy.row, A_scipy.col, A_scipy.data, A_scipy.shape, check=False)


# ---------- Timing helpers ----------


def time_op(fn: Callable[[], Any], warmup: int, repeat: int) -> List[float]:
    for _ in range(warmup):
        fn()
    times: List[float] = []
    for _ in range(repeat):
        t0 = time.perf_counter()
        fn()
        t1 = time.perf_counter()
        times.append(t1 - t0)
    return times


def summarize(name: str, times: List[float], nbytes: float) -> Optional[Dict[str, float]]:
    if not times:
        return None
    arr = np.array(times, dtype=np.float64)
    return {
        "name": name,
        "min_ms": float(arr.min() * 1e3),
        "median_ms": float(np.median(arr) * 1e3),
        "mean_ms": float(arr.mean() * 1e3),
        "mbps": float((nbytes / arr.min()) / 1e6) if nbytes > 0 else 0.0,
    }


class Backend:
    SCIPY = "scipy"
    MTXIO = "mtxio"


def run_write_scipy(A: sp.coo_matrix) -> str:
    buf = io.BytesIO()
    sio.mmwrite(buf, A)
    return buf.getvalue().decode("ascii")


def run_read_scipy(text: str) -> sp.coo_matrix:
    return sio.mmread(io.BytesIO(text.encode("ascii")))


def main():
    p = argparse.ArgumentParser(description="Matrix Market read/write benchmarks against scipy.io")
    p.add_argument("--m", type=int, default=2048)
    p.add_argument("--n", type=int, default=2048)
    p.add_argument("--density", type=float, default=0.001)
    p.add_argument("--dtype", type=str, default="float64", choices=["float32", "float64"])
    p.add_argument("--warmup", type=int, default=1)
    p.add_argument("--repeat", type=int, default=5)
    p.add_argument("--seed", type=int, default=0)
    p.add_argument("--no_scipy", action="store_true")
    p.add_argument("--validate", action="store_true")
    p.add_argument("--ops", type=str, default="all", help="Comma-separated ops: read, write")

    args = p.parse_args()
    dtype = np.float64 if args.dtype == "float64" else np.float32

    A_scipy, nnz = build_scipy_coo(args.m, args.n, args.density, args.seed, dtype)
    A = build_mtxio_sparse_from_scipy(A_scipy)
    text = mtxio.serialize(A)
    nbytes = float(len(text))

    wanted = {op.strip().lower() for op in (args.ops.split(",") if args.ops else [])}
    if "all" in wanted or not wanted:
        wanted = {"read", "write"}

    results: List[Dict[str, float]] = []

    # ---- write ----
    if "write" in wanted:
        times = time_op(lambda: mtxio.serialize(A), args.warmup, args.repeat)
        results.append(summarize(Backend.MTXIO + ":write", times, nbytes))
        if not args.no_scipy:
            times = time_op(lambda: run_write_scipy(A_scipy), args.warmup, args.repeat)
            results.append(summarize(Backend.SCIPY + ":write", times, nbytes))

    # ---- read ----
    if "read" in wanted:
        times = time_op(lambda: mtxio.parse(text, dtype=dtype), args.warmup, args.repeat)
        results.append(summarize(Backend.MTXIO + ":read", times, nbytes))
        if not args.no_scipy:
            times = time_op(lambda: run_read_scipy(text), args.warmup, args.repeat)
            results.append(summarize(Backend.SCIPY + ":read", times, nbytes))
        if args.validate:
            B = mtxio.parse(text, dtype=dtype)
            if B != A:
                raise AssertionError("Validation failed: mtxio read-back differs from source")
            if not args.no_scipy:
                ref = run_read_scipy(text).toarray()
                if not np.array_equal(B.toarray(), ref):
                    raise AssertionError("Validation failed: mtxio read vs scipy")

    # ---- print summary ----
    print(
        f"Matrix Market I/O: m={args.m} n={args.n} density={args.density} dtype={args.dtype} nnz={nnz} bytes={int(nbytes)}"
    )
    for r in results:
        if not r:
            continue
        print(
            f"{r['name']:>14}: min {r['min_ms']:.3f} ms | median {r['median_ms']:.3f} ms | mean {r['mean_ms']:.3f} ms | {r['mbps']:.1f} MB/s"
        )


if __name__ == "__main__":
    main()
