import json
import os


def load(filename):
    # loads the json content of a report file
    # (error will be raised if file doesn't exist)

    with open(filename) as file:
        content = json.load(file)

    return content


def save(filename, content=None):
    # saves the json content to a file, creating the history directory on the way

    if content is None:
        content = {}

    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(filename, "w") as outfile:
        json.dump(
            content,
            outfile,
            indent=2,
        )

    return filename
