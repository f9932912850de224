"""
Constants for SQLite storage plugin.

This module defines constants used by the SQLite storage implementation:
- File names
- SQL schema definitions
- Common SQL queries
"""

# Database file name
STORAGEDB = "zoo.db"

# SQL Schema Definitions

AVIARY_SCHEMA = """
CREATE TABLE IF NOT EXISTS aviaries (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    category TEXT NOT NULL,
    area REAL NOT NULL,
    capacity INTEGER NOT NULL,
    caretaker_id TEXT
)
"""

# Endpoints are stored in ascending order so each path has one row.
PATH_SCHEMA = """
CREATE TABLE IF NOT EXISTS paths (
    from_id TEXT NOT NULL,
    to_id TEXT NOT NULL,
    length REAL NOT NULL,
    PRIMARY KEY (from_id, to_id)
)
"""

ANIMAL_SCHEMA = """
CREATE TABLE IF NOT EXISTS animals (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    species TEXT NOT NULL,
    category TEXT NOT NULL,
    age INTEGER NOT NULL,
    weight REAL NOT NULL,
    aviary_id TEXT,
    is_fed INTEGER NOT NULL DEFAULT 0
)
"""

CARETAKER_SCHEMA = """
CREATE TABLE IF NOT EXISTS caretakers (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    age INTEGER NOT NULL,
    salary REAL NOT NULL,
    experience INTEGER NOT NULL,
    aviary_ids TEXT NOT NULL
)
"""

ALL_SCHEMAS = (AVIARY_SCHEMA, PATH_SCHEMA, ANIMAL_SCHEMA, CARETAKER_SCHEMA)

# Common SQL Queries

# Aviary queries
SELECT_AVIARIES = "SELECT id, name, category, area, capacity, caretaker_id FROM aviaries"
INSERT_AVIARY = """
INSERT INTO aviaries (id, name, category, area, capacity, caretaker_id)
VALUES (?, ?, ?, ?, ?, ?)
"""
DELETE_AVIARY = "DELETE FROM aviaries WHERE id = ?"
UPDATE_AVIARY_CARETAKER = "UPDATE aviaries SET caretaker_id = ? WHERE id = ?"

# Path queries
SELECT_PATHS = "SELECT from_id, to_id, length FROM paths"
INSERT_PATH = "INSERT INTO paths (from_id, to_id, length) VALUES (?, ?, ?)"
DELETE_PATH = "DELETE FROM paths WHERE from_id = ? AND to_id = ?"
UPDATE_PATH_LENGTH = "UPDATE paths SET length = ? WHERE from_id = ? AND to_id = ?"

# Animal queries
SELECT_ANIMALS = """
SELECT id, name, species, category, age, weight, aviary_id, is_fed FROM animals
"""
INSERT_ANIMAL = """
INSERT INTO animals (id, name, species, category, age, weight, aviary_id, is_fed)
VALUES (?, ?, ?, ?, ?, ?, ?, ?)
"""
DELETE_ANIMAL = "DELETE FROM animals WHERE id = ?"
UPDATE_ANIMAL_AVIARY = "UPDATE animals SET aviary_id = ? WHERE id = ?"
UPDATE_ANIMAL = """
UPDATE animals
SET name = ?, species = ?, category = ?, age = ?, weight = ?, aviary_id = ?, is_fed = ?
WHERE id = ?
"""

# Caretaker queries
SELECT_CARETAKERS = "SELECT id, name, age, salary, experience, aviary_ids FROM caretakers"
INSERT_CARETAKER = """
INSERT INTO caretakers (id, name, age, salary, experience, aviary_ids)
VALUES (?, ?, ?, ?, ?, ?)
"""
DELETE_CARETAKER = "DELETE FROM caretakers WHERE id = ?"
UPDATE_CARETAKER_AVIARIES = "UPDATE caretakers SET aviary_ids = ? WHERE id = ?"
