"""sqlite_smoke 起動スクリプト"""
import sys
from pathlib import Path

# プロジェクトルートをPYTHONPATHに追加
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

if __name__ == "__main__":
    from sqlite_smoke.cli import main

    sys.exit(main())
