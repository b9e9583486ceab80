"""Apply the `events` table DDL to `settings.db_url`.

Run from the backend directory so `settings` and `db` resolve:
    cd backend && python -m scripts.create_events_table
"""

import psycopg

from db import CONNECT_TIMEOUT
from settings import settings

DDL = '''
CREATE TABLE IF NOT EXISTS events (
    event_id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    event TEXT NOT NULL,
    date TIMESTAMP NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_events_user_date ON events (user_id, date);
'''


def main() -> None:
    print('Connecting to', settings.db_url)
    with psycopg.connect(settings.db_url, connect_timeout=CONNECT_TIMEOUT) as conn:
        with conn.cursor() as cur:
            cur.execute(DDL)
        conn.commit()
    print('DDL applied')


if __name__ == '__main__':
    main()
