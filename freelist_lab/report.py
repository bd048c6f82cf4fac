"""Text reports on an allocator's free list and statistics."""

from __future__ import annotations

from freelist_lab.mem import Allocator


def format_free_list(allocator: Allocator) -> str:
    """Render one line per free-list block, starting with the dummy block.

    Nothing is rendered before the allocator has requested its first page.
    """
    if not allocator.initialized:
        return ""
    return "".join(
        f"p={block.address:#x}, size={block.size}, "
        f"end={block.end:#x}, next={block.next:#x}\n"
        for block in allocator.free_blocks()
    )


def format_stats(allocator: Allocator) -> str:
    """Render the free-list summary, noting when no memory can have leaked."""
    if not allocator.initialized:
        return ""
    stats = allocator.stats()
    text = (
        f"\n Total number of Chunks in free list: {stats.chunks}"
        f"\nMin Size: {stats.min_bytes:0.2f} Max Size: {stats.max_bytes:0.2f} "
        f"Average Size: {stats.average_bytes:0.3f}"
        f"\nTotal Memory in list: {stats.total_bytes}"
        f"\nCalls to sbrk: {stats.sbrk_calls}, "
        f"Pages Requested: {stats.pages_requested}\n"
    )
    if stats.all_memory_free:
        text += "\n All memory is in heap - no leaks are possible \n"
    return text