from databases import Database

from pickem.config import config

database = Database(str(config.pg_dsn))
