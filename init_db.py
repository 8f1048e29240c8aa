#!/usr/bin/env python3
"""
데이터베이스 초기화 스크립트

사용법:
    python init_db.py

이 스크립트는 다음 작업을 수행합니다:
1. 데이터베이스 테이블 생성
2. 관리자 계정 생성
"""

import sys

from app.init_data import ADMIN_PASSWORD, ADMIN_USERNAME, init_database

if __name__ == "__main__":
    print("=" * 50)
    print("TodoTravel - 데이터베이스 초기화")
    print("=" * 50)

    try:
        init_database()
        print("\n" + "=" * 50)
        print("초기화 완료!")
        print("\n관리자 계정 정보:")
        print(f"아이디: {ADMIN_USERNAME}")
        print(f"비밀번호: {ADMIN_PASSWORD}")
        print("=" * 50)

    except Exception as e:
        print(f"\n❌ 초기화 실패: {e}")
        sys.exit(1)
