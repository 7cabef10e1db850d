from typing import Optional

import pycouchdb
import requests

from blogcore.errors import StoreUnavailableError
from blogcore.services.content_parser import ContentParser
from blogcore.settings import Settings, settings


def get_couch(current_settings: Optional[Settings] = None):
    """
    Create a CouchDB database handle and matching ContentParser.
    Called at runtime to avoid import-time connections.
    """
    current_settings = current_settings or settings
    try:
        couch = pycouchdb.Server(current_settings.couchdb_url)
        database = couch.database(current_settings.COUCHDB_DATABASE)
    except (pycouchdb.exceptions.Error, requests.RequestException) as e:
        raise StoreUnavailableError(
            f"Could not open CouchDB database {current_settings.COUCHDB_DATABASE}: {e}"
        ) from e
    parser = ContentParser(database)
    return database, parser
