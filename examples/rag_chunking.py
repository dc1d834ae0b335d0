"""
Example demonstrating RAG chunking functionality.

This example shows how to use load_guide_chunks() to generate text chunks
for vector databases or RAG (Retrieval-Augmented Generation) systems.
"""

from pathlib import Path

from styleguide_loader import StyleGuideLoaderContext


print("RAG Chunking Example")
print("=" * 50)
print()

project_dir = Path(__file__).parent.parent.resolve()
ctx = StyleGuideLoaderContext(project_dir)

print("Example 1: Basic Chunking")
print("-" * 50)
print("Splitting the rendered guide into 200-character chunks:")
print()

for i, (file_path, text, start_line, end_line) in enumerate(ctx.load_guide_chunks(chunk_size=200)):
    filename = Path(file_path).name
    preview = text[:50].replace("\n", " ") + "..."
    print(f"Chunk {i + 1}: {filename} (lines {start_line}-{end_line})")
    print(f"  Length: {len(text)} chars")
    print(f"  Content: {preview}")
    print()

    if i >= 2:
        print("... (stopping output)")
        break

print()
print("Example 2: Overlapping Chunks")
print("-" * 50)
print("Splitting with 50-character overlap (better for RAG context preservation):")
print()

overlapping_chunks = ctx.load_guide_chunks(chunk_size=200, chunk_overlap=50)

for i, (file_path, text, start_line, end_line) in enumerate(overlapping_chunks):
    if i >= 2:
        break

    filename = Path(file_path).name
    print(f"Chunk {i + 1}: {filename} (lines {start_line}-{end_line})")
    print(f"  Start: {text[:20].replace(chr(10), ' ')}...")
    print(f"  End:   ...{text[-20:].replace(chr(10), ' ')}")
    print()
