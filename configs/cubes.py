"""
Example cubes used by the demo script and the tests.

- PricingCube: region x product prices with a product-wide fallback
- RankingCube: candidates ranked by several attributes at once
"""

from mdacube.cube.store import Cube
from mdacube.cube.enumerator import EnumeratorConfig


def create_pricing_cube(config: EnumeratorConfig = None) -> Cube:
    """
    PricingCube.

    Dimensions:
    - region: US, EU
    - product: A, B

    Attributes: price (product B priced once for every region)
    """
    cube = Cube.new(config)
    cube = cube.set({"region": "US", "product": "A"}, "price", 10)
    cube = cube.set({"region": "EU", "product": "A"}, "price", 20)
    cube = cube.set({"product": "B"}, "price", 5)
    return cube


def create_ranking_cube(config: EnumeratorConfig = None) -> Cube:
    """
    RankingCube.

    Dimensions:
    - team: backend, frontend
    - level: junior, senior
    - city: Berlin, Lisbon, Oslo

    Attributes: salary, remote, rating
    """
    cube = Cube.new(config)

    # salary by level everywhere, overridden for Oslo seniors
    cube = cube.set({"level": "junior"}, "salary", 50000)
    cube = cube.set({"level": "senior"}, "salary", 80000)
    cube = cube.set({"level": "senior", "city": "Oslo"}, "salary", 95000)

    cube = cube.set({"city": "Berlin"}, "remote", True)
    cube = cube.set({"city": "Lisbon"}, "remote", True)
    cube = cube.set({"city": "Oslo"}, "remote", False)

    cube = cube.set({"team": "backend"}, "rating", 4)
    cube = cube.set({"team": "frontend"}, "rating", 3)
    cube = cube.set({"team": "frontend", "city": "Lisbon"}, "rating", 5)
    return cube


CUBES = {
    "pricing": create_pricing_cube,
    "ranking": create_ranking_cube,
}
