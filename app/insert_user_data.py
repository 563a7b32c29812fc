import os
import json
import csv

from document_store import DocumentStore
from es_settings import ElasticsearchSettings
from create_user_index import USER_INDEX, USER_TYPE

BATCH_SIZE = 1000


def read_mock_data(file_path):
    """
    Reads mock data from either a CSV or JSON file.
    :param file_path: Path to the mock data file
    :return: List of dictionaries containing the mock data
    """
    file_extension = os.path.splitext(file_path)[1].lower()
    if file_extension == '.csv':
        with open(file_path, mode='r', encoding='utf-8') as file:
            reader = csv.DictReader(file)
            return list(reader)
    elif file_extension == '.json':
        with open(file_path, mode='r', encoding='utf-8') as file:
            return json.load(file)
    else:
        raise ValueError("Unsupported file type. Please use CSV or JSON.")


def insert_mock_data(store: DocumentStore, data, batch_size: int = BATCH_SIZE):
    """
    Inserts user records into Elasticsearch in bulk batches.
    :param store: DocumentStore pointed at the user index
    :param data: List of dictionaries containing the mock data
    :return: Number of batches that reported item errors
    """
    batch = []
    failed_batches = 0

    for count, record in enumerate(data, start=1):
        user = dict(record)
        # CSV rows carry every value as a string
        user["id"] = int(user["id"])
        batch.append(user)

        if count % batch_size == 0:
            if store.bulk(batch).get("errors"):
                failed_batches += 1
            batch = []
            print(f"Inserted {count} documents")

    # Insert any remaining documents
    if batch:
        if store.bulk(batch).get("errors"):
            failed_batches += 1

    print(f"Inserted all {len(data)} documents")
    return failed_batches


def get_mock_data_file():
    """
    Determine the file to read mock data from by checking for
    mock_data.csv or mock_data.json in the current directory.
    """
    csv_file = "mock_data.csv"
    json_file = "mock_data.json"

    if os.path.exists(csv_file):
        return csv_file
    elif os.path.exists(json_file):
        return json_file
    else:
        raise FileNotFoundError("No mock data file found. Ensure 'mock_data.csv' or 'mock_data.json' is present in the current directory.")


if __name__ == "__main__":
    file_path = get_mock_data_file()
    with DocumentStore(ElasticsearchSettings.from_env()) as store:
        store.set_index(USER_INDEX)
        store.set_type(USER_TYPE)
        mock_data = read_mock_data(file_path)
        failed = insert_mock_data(store, mock_data)
    if failed:
        print(f"{failed} batch(es) reported indexing errors.")
    else:
        print("Mock data insertion completed successfully.")
