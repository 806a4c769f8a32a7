"""
Server-side Lua routines for the term index.

Redis has no command to find a sorted-set member by suffix or to rename a
member, so these run as scripts: each call executes atomically next to the
data instead of streaming the whole set to the client.
"""

from dataclasses import dataclass

from redis.asyncio import Redis
from redis.commands.core import AsyncScript

# Shared by every routine: scan KEYS[1] for the member whose last "::"
# segment equals ARGV[1].
_FIND_MEMBER = """
local find_member = function(zkey, doc_key)
    local members = redis.call("ZRANGE", zkey, 0, -1)
    for i = 1, #members do
        if string.match(members[i], ".*::(.*)$") == doc_key then
            return members[i]
        end
    end
    return nil
end
"""

LOCATE_MEMBER = _FIND_MEMBER + """
local member = find_member(KEYS[1], ARGV[1])
if member == nil then
    return false
end
return member
"""

REPLACE_MEMBER = _FIND_MEMBER + """
local member = find_member(KEYS[1], ARGV[1])
if member == nil then
    return 0
end
redis.call("ZREM", KEYS[1], member)
redis.call("ZADD", KEYS[1], 0, ARGV[2])
return 1
"""

MEMBER_EXISTS = _FIND_MEMBER + """
if find_member(KEYS[1], ARGV[1]) == nil then
    return 0
end
return 1
"""


@dataclass(frozen=True)
class ScriptTable:
    """Scripts registered once per engine and shared read-only afterwards."""

    locate_member: AsyncScript
    replace_member: AsyncScript
    member_exists: AsyncScript

    @classmethod
    def register(cls, client: Redis) -> "ScriptTable":
        return cls(
            locate_member=client.register_script(LOCATE_MEMBER),
            replace_member=client.register_script(REPLACE_MEMBER),
            member_exists=client.register_script(MEMBER_EXISTS),
        )
