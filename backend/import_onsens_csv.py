"""
从 CSV 文件批量导入温泉（与管理后台的 CSV 导入使用同一服务）。

用法（在 backend 目录下执行）：
  python import_onsens_csv.py data/onsens.csv
  python import_onsens_csv.py data/onsens.csv --show-skipped
"""

import argparse
import sys

from app.core.database import SessionLocal
from app.services.csv_import_service import import_onsens_csv


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("path", help="UTF-8 编码的 CSV 文件")
    parser.add_argument("--show-skipped", action="store_true", help="输出被跳过的行及原因")
    args = parser.parse_args()

    with open(args.path, "rb") as f:
        content = f.read()

    db = SessionLocal()
    try:
        result = import_onsens_csv(db, content)
    finally:
        db.close()

    print(result.message)
    if args.show_skipped:
        for row in result.results:
            if not row.success:
                print(f"  row {row.row}: {'; '.join(row.errors)}")
    return 1 if result.error else 0


if __name__ == "__main__":
    sys.exit(main())
