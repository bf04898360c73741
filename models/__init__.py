from models.db_storage import DBStorage

# Engine is bound later by create_app() through storage.reload(DATABASE_URL)
storage = DBStorage()
