import asyncio
import os
import sys
from pathlib import Path


async def recreate_db():
    backend_root = Path(__file__).resolve().parents[1]
    # 相对路径的数据库文件以后端根目录为准
    os.chdir(backend_root)
    sys.path.insert(0, str(backend_root))

    from app.config import settings  # type: ignore
    db_path = Path(settings.DATABASE_PATH)
    if db_path.exists():
        db_path.unlink()

    from app.database import create_tables, dispose_engine  # type: ignore
    await create_tables()
    await dispose_engine()
    return db_path


if __name__ == '__main__':
    path = asyncio.run(recreate_db())
    print(f'Database recreated at {path}.')
