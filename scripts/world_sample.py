"""
A small slice of the World sample database.

Enough rows to exercise every query in the project: the ten largest cities,
the countries above 100 million people, Albania (city 34, Tirana), and
Antarctica for NULL-heavy country rows. Values follow the public World
dataset.
"""

from __future__ import annotations

from decimal import Decimal as D
from typing import List

COUNTRY_COLUMNS = (
    "CODE", "NAME", "CONTINENT", "REGION", "SURFACEAREA", "INDEPYEAR", "POPULATION",
    "LIFEEXPECTANCY", "GNP", "GNPOLD", "LOCALNAME", "GOVERNMENTFORM", "HEADOFSTATE",
    "CAPITAL", "CODE2",
)

CITY_COLUMNS = ("ID", "NAME", "COUNTRYCODE", "DISTRICT", "POPULATION")

COUNTRY_DDL = """
CREATE TABLE IF NOT EXISTS COUNTRY (
    CODE VARCHAR(3) PRIMARY KEY,
    NAME VARCHAR,
    CONTINENT VARCHAR,
    REGION VARCHAR,
    SURFACEAREA DECIMAL(10,2),
    INDEPYEAR SMALLINT,
    POPULATION INT,
    LIFEEXPECTANCY DECIMAL(3,1),
    GNP DECIMAL(10,2),
    GNPOLD DECIMAL(10,2),
    LOCALNAME VARCHAR,
    GOVERNMENTFORM VARCHAR,
    HEADOFSTATE VARCHAR,
    CAPITAL INT,
    CODE2 VARCHAR(2)
)"""

CITY_DDL = """
CREATE TABLE IF NOT EXISTS CITY (
    ID INT,
    NAME VARCHAR,
    COUNTRYCODE VARCHAR(3),
    DISTRICT VARCHAR,
    POPULATION INT,
    PRIMARY KEY (ID, COUNTRYCODE)
)"""

CITY_COLOCATION = " COLOCATE BY (COUNTRYCODE)"

COUNTRY_ROWS = [
    ("ALB", "Albania", "Europe", "Southern Europe", D("28748.00"), 1912, 3401200, D("71.6"),
     D("3205.00"), D("2500.00"), "Shqipëria", "Republic", "Rexhep Mejdani", 34, "AL"),
    ("ATA", "Antarctica", "Antarctica", "Antarctica", D("13120000.00"), None, 0, None,
     D("0.00"), None, "–", "Co-administrated", None, None, "AQ"),
    ("BGD", "Bangladesh", "Asia", "Southern and Central Asia", D("143998.00"), 1971, 129155000,
     D("60.2"), D("32852.00"), D("31966.00"), "Bangladesh", "Republic", "Shahabuddin Ahmad",
     150, "BD"),
    ("BRA", "Brazil", "South America", "South America", D("8547403.00"), 1822, 170115000,
     D("62.9"), D("776739.00"), D("804108.00"), "Brasil", "Federal Republic",
     "Fernando Henrique Cardoso", 211, "BR"),
    ("CHN", "China", "Asia", "Eastern Asia", D("9572900.00"), -1523, 1277558000, D("71.4"),
     D("982268.00"), D("917719.00"), "Zhongquo", "People'sRepublic", "Jiang Zemin", 1891, "CN"),
    ("IDN", "Indonesia", "Asia", "Southeast Asia", D("1904569.00"), 1945, 212107000, D("68.0"),
     D("84982.00"), D("215002.00"), "Indonesia", "Republic", "Abdurrahman Wahid", 939, "ID"),
    ("IND", "India", "Asia", "Southern and Central Asia", D("3287263.00"), 1947, 1013662000,
     D("62.5"), D("447114.00"), D("430572.00"), "Bharat/India", "Federal Republic",
     "Kocheril Raman Narayanan", 1109, "IN"),
    ("JPN", "Japan", "Asia", "Eastern Asia", D("377829.00"), -660, 126714000, D("80.7"),
     D("3787042.00"), D("4192638.00"), "Nihon/Nippon", "Constitutional Monarchy", "Akihito",
     1532, "JP"),
    ("KOR", "South Korea", "Asia", "Eastern Asia", D("99434.00"), 1948, 46844000, D("74.4"),
     D("320749.00"), D("442544.00"), "Taehan Minguk (Namhan)", "Republic", "Kim Dae-jung",
     2331, "KR"),
    ("MEX", "Mexico", "North America", "Central America", D("1958201.00"), 1810, 98881000,
     D("71.5"), D("414972.00"), D("401461.00"), "México", "Federal Republic",
     "Vicente Fox Quesada", 2515, "MX"),
    ("NGA", "Nigeria", "Africa", "Western Africa", D("923768.00"), 1960, 111506000, D("51.6"),
     D("65707.00"), D("58623.00"), "Nigeria", "Federal Republic", "Olusegun Obasanjo", 2754,
     "NG"),
    ("PAK", "Pakistan", "Asia", "Southern and Central Asia", D("796095.00"), 1947, 156483000,
     D("61.1"), D("61289.00"), D("58549.00"), "Pakistan", "Republic", "Mohammad Rafiq Tarar",
     2831, "PK"),
    ("RUS", "Russian Federation", "Europe", "Eastern Europe", D("17075400.00"), 1991, 146934000,
     D("67.2"), D("276608.00"), D("442989.00"), "Rossija", "Federal Republic", "Vladimir Putin",
     3580, "RU"),
    ("TUR", "Turkey", "Asia", "Middle East", D("774815.00"), 1923, 66591000, D("71.0"),
     D("210721.00"), D("189122.00"), "Türkiye", "Republic", "Ahmet Necdet Sezer", 3358, "TR"),
    ("USA", "United States", "North America", "North America", D("9363520.00"), 1776, 278357000,
     D("77.1"), D("8510700.00"), D("8110900.00"), "United States", "Federal Republic",
     "George W. Bush", 3813, "US"),
]

CITY_ROWS = [
    (34, "Tirana", "ALB", "Tirana", 270000),
    (35, "Durrës", "ALB", "Durrës", 99000),
    (150, "Dhaka", "BGD", "Dhaka", 3612850),
    (206, "São Paulo", "BRA", "São Paulo", 9968485),
    (207, "Rio de Janeiro", "BRA", "Rio de Janeiro", 5598953),
    (939, "Jakarta", "IDN", "Jakarta Raya", 9604900),
    (1024, "Mumbai (Bombay)", "IND", "Maharashtra", 10500000),
    (1025, "Delhi", "IND", "Delhi", 7206704),
    (1532, "Tokyo", "JPN", "Tokyo-to", 7980230),
    (1890, "Shanghai", "CHN", "Shanghai", 9696300),
    (1891, "Peking", "CHN", "Peking", 7472000),
    (2331, "Seoul", "KOR", "Seoul", 9981619),
    (2515, "Ciudad de México", "MEX", "Distrito Federal", 8591309),
    (2822, "Karachi", "PAK", "Sindh", 9269265),
    (3357, "Istanbul", "TUR", "Istanbul", 8787958),
    (3580, "Moscow", "RUS", "Moscow (City)", 8389200),
    (3793, "New York", "USA", "New York", 8008278),
]


def schema_statements(colocate: bool = True) -> List[str]:
    """DDL for both tables; ``colocate=False`` drops the Ignite-only clause."""
    return [COUNTRY_DDL, CITY_DDL + (CITY_COLOCATION if colocate else "")]


def insert_statement(table: str, columns: tuple) -> str:
    return f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({', '.join('?' for _ in columns)})"
