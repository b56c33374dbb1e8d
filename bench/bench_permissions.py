import argparse
import statistics
import time

from policykit import Policy, use_permission


def gen_policy(n: int) -> Policy:
    rules = {}
    for i in range(n):
        rules[f"action_{i}"] = lambda user, doc, i=i: doc["level"] >= i or user["id"] == doc["owner"]
    rules["before"] = lambda user, doc: user.get("admin", False)
    return Policy(rules, name=f"bench_{n}")


def run(size: int, iters: int):
    perms = use_permission(gen_policy(size), for_user={"id": "u", "admin": False})
    doc = {"owner": "other", "level": size}
    actions = [f"action_{i}" for i in range(size)]
    lat = []
    allowed = False
    for _ in range(iters):
        t0 = time.perf_counter()
        allowed = perms.allows(actions, doc)
        lat.append((time.perf_counter() - t0) * 1000.0)
    return {
        "p50": statistics.median(lat),
        "avg": sum(lat) / len(lat),
        "p90": percentile(lat, 90),
        "allowed": allowed,
    }


def percentile(arr, p):
    arr2 = sorted(arr)
    k = int(round((p / 100.0) * (len(arr2) - 1)))
    return arr2[k]


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--sizes", type=int, nargs="+", default=[1, 10, 50, 100, 500])
    ap.add_argument("--iters", type=int, default=200)
    args = ap.parse_args()
    print("actions,avg_ms,p50_ms,p90_ms,allowed")
    for s in args.sizes:
        r = run(s, args.iters)
        print(f"{s},{r['avg']:.3f},{r['p50']:.3f},{r['p90']:.3f},{r['allowed']}")


if __name__ == "__main__":
    main()
