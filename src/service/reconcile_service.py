"""Blob Store ↔ DB 정합성 점검.

업로드/업데이트는 "파일 쓰기 → 레코드 쓰기" 두 단계로 나뉘어 있고 트랜잭션이 없다.
그 사이에서 실패하면 어떤 레코드도 가리키지 않는 파일이 남거나,
파일이 사라진 레코드가 생긴다. 이 모듈은 요청 경로 밖에서 돌리는 정리 작업이다.
"""

from dataclasses import dataclass, field

from loguru import logger
from sqlmodel import Session, select

from model.image import ImageRecord
from storage.blob_store import BlobStore


@dataclass
class ReconcileReport:
    orphaned_files: list[str] = field(default_factory=list)
    dangling_records: list[int] = field(default_factory=list)
    removed_files: list[str] = field(default_factory=list)


def find_orphaned_files(store: BlobStore, session: Session) -> list[str]:
    """어떤 레코드도 참조하지 않는 파일 목록.

    in-place 업데이트 후 원본 업로드 파일도 여기에 포함된다.
    """
    referenced = set(session.exec(select(ImageRecord.filename)).all())
    return [name for name in store.list_filenames() if name not in referenced]


def find_dangling_records(store: BlobStore, session: Session) -> list[ImageRecord]:
    """파일이 사라져 서빙할 수 없는 레코드 목록."""
    records = session.exec(select(ImageRecord)).all()
    return [r for r in records if not store.exists(r.filename)]


def reconcile(store: BlobStore, session: Session, dry_run: bool = True) -> ReconcileReport:
    """고아 파일을 찾고, dry_run=False면 삭제한다. 레코드는 건드리지 않는다."""
    report = ReconcileReport(
        orphaned_files=find_orphaned_files(store, session),
        dangling_records=[r.id for r in find_dangling_records(store, session)],
    )

    if not dry_run:
        for name in report.orphaned_files:
            if store.remove(name):
                report.removed_files.append(name)
        logger.info(f"Removed {len(report.removed_files)} orphaned file(s)")

    if report.dangling_records:
        logger.warning(f"Records without file: {report.dangling_records}")
    return report
