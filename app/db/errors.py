class PersistenceError(RuntimeError):
    """Сбой хранилища, который не должен раскрываться клиенту"""
