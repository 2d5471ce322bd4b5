"""Built-in city catalog."""

from blindglobe.game.catalog import City, Difficulty

EASY = Difficulty.EASY
MEDIUM = Difficulty.MEDIUM
HARD = Difficulty.HARD

CITIES: list[City] = [
    # Major world cities
    City("Tokyo", 35.6762, 139.6503, EASY, "Japan"),
    City("New York", 40.7128, -74.0060, EASY, "United States"),
    City("London", 51.5074, -0.1278, EASY, "United Kingdom"),
    City("Paris", 48.8566, 2.3522, EASY, "France"),
    City("Sydney", -33.8688, 151.2093, EASY, "Australia"),
    City("Moscow", 55.7558, 37.6173, EASY, "Russia"),
    City("Cairo", 30.0444, 31.2357, EASY, "Egypt"),
    City("Rio de Janeiro", -22.9068, -43.1729, EASY, "Brazil"),
    City("Beijing", 39.9042, 116.4074, EASY, "China"),
    City("Los Angeles", 34.0522, -118.2437, EASY, "United States"),
    # Well known, harder to place
    City("Mumbai", 19.0760, 72.8777, MEDIUM, "India"),
    City("Istanbul", 41.0082, 28.9784, MEDIUM, "Turkey"),
    City("Buenos Aires", -34.6037, -58.3816, MEDIUM, "Argentina"),
    City("Cape Town", -33.9249, 18.4241, MEDIUM, "South Africa"),
    City("Singapore", 1.3521, 103.8198, MEDIUM, "Singapore"),
    City("Toronto", 43.6510, -79.3470, MEDIUM, "Canada"),
    City("Berlin", 52.5200, 13.4050, MEDIUM, "Germany"),
    City("Madrid", 40.4168, -3.7038, MEDIUM, "Spain"),
    City("Rome", 41.9028, 12.4964, MEDIUM, "Italy"),
    City("Bangkok", 13.7563, 100.5018, MEDIUM, "Thailand"),
    # Remote or less familiar
    City("Reykjavik", 64.1466, -21.9426, HARD, "Iceland"),
    City("Wellington", -41.2865, 174.7762, HARD, "New Zealand"),
    City("Lima", -12.0464, -77.0428, HARD, "Peru"),
    City("Nairobi", -1.2921, 36.8219, HARD, "Kenya"),
    City("Ulaanbaatar", 47.9181, 106.9176, HARD, "Mongolia"),
    City("Anchorage", 61.2181, -149.9003, HARD, "United States"),
    City("Perth", -31.9505, 115.8605, HARD, "Australia"),
    City("Casablanca", 33.5731, -7.5898, HARD, "Morocco"),
    City("Helsinki", 60.1699, 24.9384, HARD, "Finland"),
    City("Santiago", -33.4489, -70.6693, HARD, "Chile"),
]
