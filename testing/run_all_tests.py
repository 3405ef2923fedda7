import argparse
import subprocess
import sys
import time
from pathlib import Path

HERE = Path(__file__).parent

DEFAULT_ORDER = [
    "mbr_test.py",
    "split_test.py",
    "node_test.py",
    "rtree_test.py",
    "invariants_test.py",
    "load_test.py",
    "settings_test.py",
]

def main():
    ap = argparse.ArgumentParser(description="Runner de tests del R-Tree")
    ap.add_argument("--only", help="Lista separada por comas: mbr,split,node,rtree,invariants,load,settings", default="")
    args = ap.parse_args()

    order = DEFAULT_ORDER
    if args.only.strip():
        order = [f"{w.strip().lower()}_test.py" for w in args.only.split(",") if w.strip()]

    failures = []
    for name in order:
        print(f"\n▶ {name}")
        start = time.time()
        rc = subprocess.run([sys.executable, name], cwd=HERE).returncode
        print(f"↳ {'OK' if rc == 0 else f'FAIL (rc={rc})'}  time={time.time() - start:.2f}s")
        if rc != 0:
            failures.append(name)

    print(f"\nTOTAL: {len(order)} tests  •  FAILS={len(failures)} {' '.join(failures)}")
    sys.exit(1 if failures else 0)

if __name__ == "__main__":
    main()
