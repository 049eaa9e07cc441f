# Loads movie records from a JSON / JSON Lines / CSV file into MongoDB
# data_processing/load_movies.py

import json
import logging
import math
import os
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

import pandas as pd
from dotenv import load_dotenv
from pymongo.collection import Collection
from pymongo.errors import BulkWriteError, PyMongoError
from tqdm import tqdm

from data_processing.common.db_connect import close_mongo_client, get_mongo_database
from movie_search.utils.helpers import parse_bool, parse_float, parse_int, split_list

logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper(),
                    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

load_dotenv()

MOVIES_COLLECTION = os.environ.get("MOVIES_COLLECTION", "movies")
INSERT_BATCH_SIZE = int(os.environ.get("MOVIES_BATCH_SIZE", "1000"))

LIST_FIELDS = ("genres", "cast")
FLOAT_FIELDS = ("average_rating",)
NUMBER_FIELDS = ("runtime",)


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def _parse_date(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    parsed = pd.to_datetime(value, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.to_pydatetime()


def normalize_movie_record(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Cleans one raw record into the shape the search API queries against.

    - missing values (None, NaN, blank strings) are dropped
    - `release_date` becomes a datetime; `year` is derived from it when absent
    - comma-joined `genres` / `cast` become lists
    - `average_rating`, `runtime` and `adult` get numeric / boolean types

    Values that cannot be converted are dropped rather than stored with the
    wrong type, since range and equality filters would never match them.
    """
    doc = {key: value for key, value in raw.items() if not _is_missing(value)}

    if "release_date" in doc:
        release_date = _parse_date(doc.pop("release_date"))
        if release_date is not None:
            doc["release_date"] = release_date
            doc.setdefault("year", release_date.year)

    if "year" in doc:
        year = parse_int(doc.pop("year"))
        if year is not None:
            doc["year"] = year

    for field in LIST_FIELDS:
        if field in doc:
            doc[field] = split_list(doc[field])

    for field in FLOAT_FIELDS:
        if field in doc:
            value = parse_float(doc.pop(field))
            if value is not None:
                doc[field] = value

    for field in NUMBER_FIELDS:
        if field in doc:
            value = parse_float(doc.pop(field))
            if value is not None:
                doc[field] = int(value) if value.is_integer() else value

    if "adult" in doc:
        adult = parse_bool(doc.pop("adult"))
        if adult is not None:
            doc["adult"] = adult

    return doc


def read_movie_records(path: Path) -> Iterator[Dict[str, Any]]:
    """Yields raw records from a .json (array), .jsonl or .csv file."""
    suffix = path.suffix.lower()
    if suffix == ".jsonl":
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line:
                    yield json.loads(line)
    elif suffix == ".json":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"{path} must contain a JSON array of movie objects")
        yield from data
    elif suffix == ".csv":
        movies_df = pd.read_csv(path)
        logger.info(f"Loaded {len(movies_df)} rows from {path}.")
        # Round-trip through JSON so cells become plain Python values (NaN -> None)
        yield from json.loads(movies_df.to_json(orient="records"))
    else:
        raise ValueError(f"Unsupported movie file type: {path.suffix}")


def _insert_batch(collection: Collection, batch: List[Dict[str, Any]]) -> Tuple[int, int]:
    try:
        result = collection.insert_many(batch, ordered=False)
        return len(result.inserted_ids), 0
    except BulkWriteError as bwe:
        inserted = bwe.details.get("nInserted", 0)
        logger.error(f"MongoDB bulk write error during movie batch insert: {bwe.details.get('writeErrors', [])[:3]}")
        return inserted, len(batch) - inserted


def insert_movies(
    collection: Collection,
    records: Iterable[Dict[str, Any]],
    batch_size: int = INSERT_BATCH_SIZE,
    total: Optional[int] = None,
) -> Tuple[int, int]:
    """
    Normalizes and inserts records in unordered batches.

    Returns:
        (inserted, failed) document counts.
    """
    inserted = failed = 0
    batch: List[Dict[str, Any]] = []

    for raw in tqdm(records, total=total, desc="Loading Movies"):
        batch.append(normalize_movie_record(raw))
        if len(batch) >= batch_size:
            ok, bad = _insert_batch(collection, batch)
            inserted, failed = inserted + ok, failed + bad
            batch = []

    if batch:
        ok, bad = _insert_batch(collection, batch)
        inserted, failed = inserted + ok, failed + bad

    return inserted, failed


def main(argv: Optional[List[str]] = None) -> int:
    """
    Loads the movie file named on the command line (or in MOVIES_DATA_FILE)
    into the movies collection and prints a JSON status summary.
    """
    argv = sys.argv[1:] if argv is None else argv
    status_data: Dict[str, Any] = {"script": "load_movies", "status": "STARTED"}
    logger.info(f"Starting script: {status_data['script']}")
    start_time = time.time()

    try:
        data_file = argv[0] if argv else os.environ.get("MOVIES_DATA_FILE")
        if not data_file:
            raise ValueError("Pass a movie file path or set MOVIES_DATA_FILE.")
        path = Path(data_file)
        if not path.exists():
            raise FileNotFoundError(f"Movie file not found: {path}")

        collection = get_mongo_database()[MOVIES_COLLECTION]
        if os.environ.get("MOVIES_DROP_EXISTING", "false").lower() == "true":
            deleted = collection.delete_many({}).deleted_count
            logger.info(f"Removed {deleted} existing movies from '{MOVIES_COLLECTION}'.")

        inserted, failed = insert_movies(collection, read_movie_records(path))
        logger.info(f"Finished loading movies. Inserted: {inserted}, Failed: {failed}")

        status_data["movies_inserted"] = inserted
        status_data["movies_failed"] = failed
        status_data["status"] = "SUCCESS" if failed == 0 else "PARTIAL_FAILURE"
    except (FileNotFoundError, ValueError) as e:
        logger.critical(f"Cannot load movies: {e}")
        status_data["status"] = "FAILURE"
        status_data["error_details"] = str(e)
    except PyMongoError as e:
        logger.critical(f"MongoDB error while loading movies: {e}", exc_info=True)
        status_data["status"] = "FAILURE"
        status_data["error_details"] = str(e)
    finally:
        close_mongo_client()

    status_data["duration_seconds"] = round(time.time() - start_time, 2)
    print(json.dumps(status_data, indent=2))
    return 1 if "FAILURE" in status_data["status"] else 0


if __name__ == "__main__":
    sys.exit(main())
