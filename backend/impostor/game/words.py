from __future__ import annotations

import random
from dataclasses import dataclass


@dataclass(frozen=True)
class WordEntry:
    topic: str
    word: str
    hints: tuple[str, ...] = ()


WORD_TABLE: tuple[WordEntry, ...] = (
    WordEntry("Breakfast Foods", "Pancakes", ("Syrup", "Flat", "Stack")),
    WordEntry("Breakfast Foods", "Scrambled Eggs", ("Yellow", "Pan", "Fluffy")),
    WordEntry("Pets", "Golden Retriever", ("Fetch", "Loyal", "Fur")),
    WordEntry("Pets", "Siamese Cat", ("Whiskers", "Purr", "Blue eyes")),
    WordEntry("Fruits", "Mango", ("Tropical", "Sweet", "Pit")),
    WordEntry("Fruits", "Pomegranate", ("Seeds", "Red", "Juice")),
    WordEntry("Sports", "Tennis", ("Racket", "Net", "Serve")),
    WordEntry("Sports", "Ice Hockey", ("Puck", "Skates", "Cold")),
    WordEntry("Countries", "Japan", ("Island", "Sushi", "Temple")),
    WordEntry("Countries", "Brazil", ("Carnival", "Rainforest", "Football")),
    WordEntry("Movies", "Titanic", ("Iceberg", "Ship", "Romance")),
    WordEntry("Movies", "The Lion King", ("Savanna", "Pride", "Song")),
    WordEntry("Vehicles", "Motorcycle", ("Helmet", "Two wheels", "Engine")),
    WordEntry("Vehicles", "Submarine", ("Underwater", "Periscope", "Sonar")),
    WordEntry("Desserts", "Cheesecake", ("Creamy", "Crust", "Slice")),
    WordEntry("Desserts", "Tiramisu", ("Coffee", "Layers", "Italian")),
    WordEntry("Musical Instruments", "Saxophone", ("Brass", "Jazz", "Reed")),
    WordEntry("Musical Instruments", "Violin", ("Bow", "Strings", "Orchestra")),
    WordEntry("Furniture", "Recliner", ("Lever", "Comfy", "Living room")),
    WordEntry("Furniture", "Bookshelf", ("Shelves", "Wood", "Library")),
    WordEntry("Drinks", "Cappuccino", ("Foam", "Espresso", "Cafe")),
    WordEntry("Drinks", "Lemonade", ("Sour", "Summer", "Pitcher")),
    WordEntry("Occupations", "Firefighter", ("Hose", "Ladder", "Siren")),
    WordEntry("Occupations", "Architect", ("Blueprint", "Building", "Design")),
    WordEntry("Clothing", "Tuxedo", ("Formal", "Bow tie", "Black")),
    WordEntry("Clothing", "Sneakers", ("Laces", "Running", "Rubber")),
)


def pick_entry(rng: random.Random, table: tuple[WordEntry, ...] = WORD_TABLE) -> WordEntry:
    if not table:
        raise ValueError("word table is empty")
    return table[rng.randrange(len(table))]


def list_topics(table: tuple[WordEntry, ...] = WORD_TABLE) -> list[str]:
    seen: dict[str, None] = {}
    for entry in table:
        seen.setdefault(entry.topic, None)
    return list(seen)
