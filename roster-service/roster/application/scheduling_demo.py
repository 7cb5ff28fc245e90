import asyncio

START = "Start demo"
READY_CALLBACK = "call_soon callback (ready queue)"
TASK_RESUMED = "await sleep(0) resumed (task step)"
TIMER_CALLBACK = "call_later(0) callback (timer)"


async def run_scheduling_demo() -> list[str]:
    """Show the order in which the asyncio loop runs queued work.

    A ``call_soon`` callback is already in the ready queue when the task
    yields, so it runs before the task resumes. An expired timer is moved
    onto the ready queue only when the loop starts its next pass, behind
    the callback and the task step already waiting there.
    """
    loop = asyncio.get_running_loop()
    lines = [START]
    timer_done = loop.create_future()

    def on_timer():
        lines.append(TIMER_CALLBACK)
        timer_done.set_result(None)

    loop.call_later(0, on_timer)
    loop.call_soon(lines.append, READY_CALLBACK)
    await asyncio.sleep(0)
    lines.append(TASK_RESUMED)

    await timer_done
    return lines
