#!/usr/bin/env python3

import os
import subprocess
import sys


ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

# file -> (stdin, expected stdout)
EXAMPLES = {
    "hello_world.bf": ("", "Hello World!\ntape: (0,0,72,100,87,33,10)\n"),
    "reverse_line.bf": ("abc\n", "cba\ntape: (10,97,98,99,0)\n"),
    "add_digits.bf": ("34\n", "7tape: (55,0)\n"),
}


def _norm(s: str) -> str:
    return s.replace('\r\n', '\n')


def _run_example(path: str, *, input_data: str, timeout_s: float = 10.0) -> dict:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.path.join(ROOT, "src") + os.pathsep + env.get("PYTHONPATH", "")
    cmd = [sys.executable, "-m", "bfi", path]
    try:
        p = subprocess.run(
            cmd,
            input=input_data,
            text=True,
            capture_output=True,
            cwd=ROOT,
            env=env,
            timeout=timeout_s,
        )
        return {"ok": p.returncode == 0, "stdout": p.stdout, "stderr": p.stderr, "timeout": False}
    except subprocess.TimeoutExpired:
        return {"ok": False, "stdout": "", "stderr": "", "timeout": True}


def main():
    failed = 0
    for name, (input_data, expected) in EXAMPLES.items():
        res = _run_example(os.path.join(os.path.dirname(__file__), name), input_data=input_data)
        if res["timeout"]:
            print(f"✗ {name}: timed out")
            failed += 1
        elif not res["ok"] or _norm(res["stdout"]) != expected:
            print(f"✗ {name}: got {res['stdout']!r}, expected {expected!r}")
            if res["stderr"]:
                print(res["stderr"])
            failed += 1
        else:
            print(f"✓ {name}")
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
