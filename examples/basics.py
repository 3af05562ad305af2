import logging

from flyx import FlyweightRegistry
from flyx.domains import (
    Forest,
    ParticleSystem,
    Position,
    TextDocument,
    WebPage,
    character_registry,
    particle_registry,
    tree_registry,
    web_element_registry,
)

# Show the registry's "Creating new flyweight" records
logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Sharing glyphs in a text document")
print("-" * 100)
print()

# A registry is a plain object: every document given the same registry shares its glyphs.
characters = character_registry()
document = TextDocument(characters)
document.add_text("Hello, flyweights!", "Arial", "normal", Position(0, 0), 12, "black")

for line in document.render()[:3]:
    print(line)
print(document.memory_footprint())

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Planting a forest")
print("-" * 100)
print()

forest = Forest(tree_registry())
for i in range(10):
    if i % 3:
        forest.plant_tree(i * 10, i * 5, 15 + i, "Oak", "Green", "oak_sprite")
    else:
        forest.plant_tree(i * 10, i * 5, 20 + i, "Pine", "Dark Green", "pine_sprite")

print(forest.render("Canvas1")[0])
print(forest.statistics())

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Running a particle system")
print("-" * 100)
print()

particles = ParticleSystem(particle_registry(), seed=0)
particles.add_explosion(0.0, 0.0, 200)
particles.add_smoke(0.0, 0.0, 50)
particles.add_sparks(0.0, 0.0, 50)
print(particles.memory_efficiency())

for _ in range(5):
    particles.update(0.5)
print(f"After 2.5s: {particles.memory_efficiency()}")

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Building a web page")
print("-" * 100)
print()

page = WebPage("Flyweights", web_element_registry())
page.add_heading(1, "Flyweights")
for i in range(3):
    page.add_paragraph(f"Paragraph {i}", classes=["body"])
page.add_button("More", "loadMore()", id="more")

print(page.render())
print(page.optimization_stats())

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Any hashable key works with your own factory")
print("-" * 100)
print()

colors = FlyweightRegistry(lambda rgb: "#%02x%02x%02x" % rgb, name="colors", maxsize=2)
print(colors.get_or_create((255, 0, 0)), colors.get_or_create((255, 0, 0)))
colors.get_or_create((0, 255, 0))
colors.get_or_create((0, 0, 255))
print(colors, colors.stats())
