#!/usr/bin/env python3
"""
Console API 冒烟测试脚本

使用方法:
1. 启动平台 API (UPSTREAM_API_BASE 指向它)
2. 启动 Django: python backend/manage.py runserver
3. 运行: python smoke_console_api.py [--token <Bearer token>]

只读检查默认执行; 加 --write 才会发送状态变更。
"""

import argparse
import json

import requests

BASE_URL = "http://localhost:8000/api/console"

LISTINGS = [
    "/tickets/",
    "/prescriptions/",
    "/orders/",
    "/samples/",
    "/modules/",
    "/financial-events/",
]


def banner(title):
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)


def show_error(body):
    """统一错误格式: {type, code, message, detail?, notifications?}"""
    print(f"  ❌ {body.get('type')} / {body.get('code')}: {body.get('message')}")
    for toast in body.get("notifications", []):
        print(f"     toast: {toast['title']}: {toast['description']}")


def check_statuses(session):
    banner("状态表 GET /statuses/")
    response = session.get(f"{BASE_URL}/statuses/")
    print(f"响应状态码: {response.status_code}")
    for entity_type, badges in response.json().items():
        labels = ", ".join(b["label"] for b in badges)
        print(f"  - {entity_type}: {labels}")


def check_listing(session, path, **params):
    banner(f"列表 GET {path} {params or ''}")
    response = session.get(f"{BASE_URL}{path}", params=params)
    body = response.json()
    print(f"响应状态码: {response.status_code}")

    if "type" in body:
        show_error(body)
        return []
    if body["count"] == 0:
        empty = body["empty_state"]
        print(f"  (空) {empty['text']} retry={empty['retry']}")
        return []

    print(f"  共 {body['count']} 条")
    for row in body["rows"][:5]:
        status = row.get("status") or row.get("activation")
        print(f"  - #{row.get('id')} {status['label'] if status else ''}")
    return body["rows"]


def check_empty_state(session):
    check_listing(session, "/tickets/", search="zzz-sem-resultado")


def check_invalid_form(session):
    """缺少必填字段: 期望 400, 不会发送任何请求"""
    banner("表单校验 POST /financial-events/ (缺少 title)")
    response = session.post(
        f"{BASE_URL}/financial-events/",
        data=json.dumps({"date": "2025-04-05", "amount": "100"}),
        headers={"Content-Type": "application/json"},
    )
    print(f"响应状态码: {response.status_code}")
    show_error(response.json())


def try_transition(session, rows):
    """对第一条工单执行第一个允许的状态变更"""
    candidates = [r for r in rows if r.get("transitions")]
    if not candidates:
        print("\n跳过状态变更: 没有可变更的工单")
        return

    ticket = candidates[0]
    target = ticket["transitions"][0]["value"]
    banner(f"状态变更 PATCH /tickets/{ticket['id']}/status/ → {target}")

    response = session.patch(
        f"{BASE_URL}/tickets/{ticket['id']}/status/",
        data=json.dumps({"status": target}),
        headers={"Content-Type": "application/json"},
    )
    body = response.json()
    print(f"响应状态码: {response.status_code}")
    if "type" in body:
        show_error(body)
        return
    for toast in body["notifications"]:
        print(f"  ✅ {toast['title']}: {toast['description']}")

    check_listing(session, "/tickets/")


def main():
    parser = argparse.ArgumentParser(description="Console API smoke test")
    parser.add_argument("--token", help="Bearer token forwarded to the platform API")
    parser.add_argument("--write", action="store_true", help="also send one ticket status change")
    args = parser.parse_args()

    session = requests.Session()
    if args.token:
        session.headers["Authorization"] = f"Bearer {args.token}"

    try:
        check_statuses(session)
        tickets = []
        for path in LISTINGS:
            rows = check_listing(session, path)
            if path == "/tickets/":
                tickets = rows
        check_empty_state(session)
        check_invalid_form(session)
        if args.write:
            try_transition(session, tickets)
    except requests.exceptions.ConnectionError:
        print("\n❌ 连接错误: 无法连接到服务器")
        print("请确保Django服务器正在运行: python backend/manage.py runserver")

    banner("测试完成")


if __name__ == "__main__":
    main()
