from concurrent.futures import ThreadPoolExecutor
import multiprocessing

# Decode/resize/encode jobs. OpenCV releases the GIL while working.
count = multiprocessing.cpu_count()
MAX_WORKERS = max(4, count + 2)

global_executor = ThreadPoolExecutor(
    max_workers=MAX_WORKERS,
    thread_name_prefix="thumbnail_worker"
)

def get_executor():
    return global_executor

def shutdown_executor():
    """Graceful shutdown of the worker pool"""
    global_executor.shutdown(wait=True)
