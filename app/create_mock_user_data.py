import os
from faker import Faker
import csv
import json
import random

fake = Faker()

ROLES = ["admin", "developer", "designer", "manager", "support"]


def generate_user(user_id):
    """Builds one mock user document with the given id."""
    return {
        "id": user_id,
        "username": fake.user_name(),         # Generates a random username
        "role": random.choice(ROLES),         # Picks a role
        "email": fake.email(),                # Generates a random email address
        "created_at": fake.date(),            # Generates a random signup date
    }


def generate_mock_data(num_records, file_type):
    """
    Generates mock user data and writes it to a CSV or JSON file.

    :param num_records: Number of records to generate
    :param file_type: The output file type, either 'csv' or 'json'
    :return: List of dictionaries containing the mock data
    """
    data = [generate_user(user_id) for user_id in range(1, num_records + 1)]

    # Write data to the specified file type
    if file_type == 'csv':
        write_to_csv(data)
    elif file_type == 'json':
        write_to_json(data)
    else:
        raise ValueError("Unsupported file type. Please choose 'csv' or 'json'.")
    return data


def write_to_csv(data, file_name='mock_data.csv'):
    """
    Writes mock data to a CSV file.

    :param data: List of dictionaries containing mock data
    """
    with open(file_name, mode='w', newline='', encoding='utf-8') as file:
        writer = csv.DictWriter(file, fieldnames=data[0].keys())
        writer.writeheader()
        writer.writerows(data)
    print(f"Mock data written to {file_name}")


def write_to_json(data, file_name='mock_data.json'):
    """
    Writes mock data to a JSON file.

    :param data: List of dictionaries containing mock data
    """
    with open(file_name, mode='w', encoding='utf-8') as file:
        json.dump(data, file, indent=4)
    print(f"Mock data written to {file_name}")


def get_file_type():
    """
    Prompt the user for a file type and validate the input.
    Deletes existing mock data files if present.

    :return: The validated file type ('csv' or 'json')
    """
    while True:
        file_type = input("Enter the file type ('csv' or 'json'): ").strip().lower()
        if file_type in ['csv', 'json']:
            delete_existing_files()
            return file_type
        else:
            print("Unsupported file type. Please choose 'csv' or 'json'.")


def delete_existing_files():
    """
    Deletes existing mock_data.csv and mock_data.json files if they exist
    in the current directory.
    """
    for file_name in ('mock_data.csv', 'mock_data.json'):
        if os.path.exists(file_name):
            os.remove(file_name)
            print(f"Deleted existing file: {file_name}")


def get_num_records():
    """
    Prompt the user for the number of users to generate and validate the input.

    :return: The number of records as a positive integer
    """
    while True:
        try:
            num_records = int(input("Enter the number of records to generate: "))
            if num_records > 0:
                return num_records
            else:
                print("Please enter a positive integer.")
        except ValueError:
            print("Invalid input. Please enter a positive integer.")


if __name__ == "__main__":
    num_records = get_num_records()
    file_type = get_file_type()
    generate_mock_data(num_records, file_type)
