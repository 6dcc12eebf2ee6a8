"""
Blob Store와 DB의 불일치를 점검하는 정리 스크립트.

사용법:
    cd src && python -m scripts.reconcile_blobs           # 점검만 (dry-run)
    cd src && python -m scripts.reconcile_blobs --apply   # 고아 파일 삭제
"""

import argparse

from sqlmodel import Session

from core.config import settings
from model.database import create_db_and_tables, engine
from service.reconcile_service import reconcile
from storage.blob_store import LocalBlobStore
from utility.logger import setup_logger


def main():
    parser = argparse.ArgumentParser(description="Blob Store ↔ DB 정합성 점검")
    parser.add_argument("--apply", action="store_true", help="고아 파일을 실제로 삭제")
    args = parser.parse_args()

    setup_logger(settings.LOG_LEVEL)
    create_db_and_tables()
    store = LocalBlobStore(settings.UPLOAD_DIR)

    with Session(engine) as session:
        report = reconcile(store, session, dry_run=not args.apply)

    print(f"Blob store: {store.root}")
    print("=" * 60)
    print(f"고아 파일      : {len(report.orphaned_files)}개")
    for name in report.orphaned_files:
        mark = "삭제됨" if name in report.removed_files else "남김"
        print(f"  - {name} ({mark})")
    print(f"파일 없는 레코드: {len(report.dangling_records)}개")
    for record_id in report.dangling_records:
        print(f"  - #{record_id}")

    if not args.apply and report.orphaned_files:
        print()
        print("--apply 옵션으로 실행하면 고아 파일을 삭제합니다.")


if __name__ == "__main__":
    main()
