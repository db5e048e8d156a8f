"""Live check — cloudkv SDK against the real key-value service."""

import asyncio
import os
import sys

# Add src to path for development
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from cloudkv import AsyncKVClient

APP_ID = os.environ.get("CLOUDKV_APP_ID", "")
APP_KEY = os.environ.get("CLOUDKV_APP_KEY", "")
USER = os.environ.get("CLOUDKV_USER", "")
BASE_URL = os.environ.get("CLOUDKV_BASE_URL", "https://kv.kevinc.ltd")

passed = 0
failed = 0

def check(condition, msg):
    global passed, failed
    if condition:
        print(f"  PASS: {msg}")
        passed += 1
    else:
        print(f"  FAIL: {msg}")
        failed += 1


async def main():
    async with AsyncKVClient(app_id=APP_ID, app_key=APP_KEY, user_name=USER, base_url=BASE_URL) as client:
        print("\n=== Int ===")
        await client.set_int("happy_test", 114514)
        await asyncio.sleep(1)
        happy = await client.get_int("happy_test")
        check(happy == 114514, f"saved int is: {happy}")
        await client.delete_key("happy_test")

        print("\n=== Int array ===")
        await client.set_int_array("int_arr", [1, 2, 3, 4, 5])
        await asyncio.sleep(1)
        arr = await client.get_int_array("int_arr") or []
        check(arr == [1, 2, 3, 4, 5], f"saved int_arr is: {', '.join(map(str, arr))}")

        print("\n=== String ===")
        await client.set_string("s", "hello")
        await asyncio.sleep(1)
        s = await client.get_string("s")
        check(s == "hello", f"saved string is: {s!r}")

        print("\n=== Absent ===")
        result = await client.fetch("absent_key")
        check(not result.ok, f"absent_key reported as {result.error.kind if result.error else 'present'}")

    print(f"\n{passed} passed, {failed} failed")
    return failed == 0


if __name__ == "__main__":
    ok = asyncio.run(main())
    sys.exit(0 if ok else 1)
