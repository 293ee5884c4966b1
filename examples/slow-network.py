import asyncio
from httpstubs import StubResponse, SimulatedTransportError, SPEED_3G, deliver
from httpstubs.utils.logging import info

"""
Slow network example

Delivers a JSON response as it would be received over a 3G connection, then
a response that fails as if the network was down.

Usage:
    python slow-network.py
"""


async def main():
	payload = {"items": [{"id": i, "name": f"Item {i}"} for i in range(2_000)]}
	response = StubResponse.FromJSON(payload, timeToFirstByte=0.2, timing=SPEED_3G)
	info("Delivering", Size=response.size, Status=response.status)
	async for emission in deliver(response, 16_000):
		info("Received chunk", Index=emission.index, Size=len(emission.payload), At=emission.at)

	failing = StubResponse.FromError(SimulatedTransportError.NotConnected())
	try:
		async for _ in deliver(failing):
			pass
	except SimulatedTransportError as e:
		info("Delivery failed", Error=str(e))


if __name__ == "__main__":
	asyncio.run(main())

# EOF
