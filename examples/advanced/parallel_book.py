"""Free-threading safe — process 1000 chapters in parallel."""

from mathfence import MathConfig, process_all_chapters

chapters = ["# Chapter " + str(i) + "\n\nLet $x_" + str(i) + " = " + str(i) + "$." for i in range(1000)]

results = process_all_chapters(chapters, MathConfig(no_css=True), max_workers=8)

print(f"Processed {len(results)} chapters in parallel")
print("First chapter:", results[0])
print("Last chapter:", results[-1])
