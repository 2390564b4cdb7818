from core import config
from core.preferences import PreferenceStore
from store.document import TripDocumentClient
from store.trips import TripSynchronizer

_synchronizer = TripSynchronizer(
    TripDocumentClient(
        api_url=config.JSONSILO_API_URL,
        api_key=config.JSONSILO_API_KEY,
        timeout=config.STORE_TIMEOUT_SECONDS,
    )
)
preference_store = PreferenceStore(config.PREFERENCES_PATH)


def get_synchronizer() -> TripSynchronizer:
    return _synchronizer


def get_preference_store() -> PreferenceStore:
    return preference_store
