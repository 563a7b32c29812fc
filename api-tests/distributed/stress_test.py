# Stress testing pushes the system beyond its capacity limits to determine the breaking point
# and monitor how it fails (gracefully or catastrophically).
from locust import HttpUser, TaskSet, task, between
from faker import Faker
import random

fake = Faker()


class DocumentTaskSet(TaskSet):
    @task
    def match(self):
        search = {
            "field": random.choice(["username", "role"]),
            "value": fake.word(),
            "limit": random.randint(1, 20),  # Random limit between 1 and 20
            "offset": random.randint(0, 100)  # Random offset between 0 and 100
        }
        self.client.post("/search/match", json=search)


class StressTestUser(HttpUser):
    tasks = [DocumentTaskSet]
    wait_time = between(0.5, 1)  # Shorter wait times to generate high load
    host = "http://localhost:8000"
