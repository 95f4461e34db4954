# src/fixer1132/macos/scripts.py

"""
Shell text handed to macOS.

- SPOOF_SCRIPT_TEMPLATE: zsh script run as root via osascript. Finds the Wi-Fi
  device, disconnects it, tries MAC candidates until `ifconfig` accepts one.
- ZOOM_SANDBOX_PROFILE: sandbox-exec policy denying reads of Zoom's local DB files.
"""

from __future__ import annotations

from ..tasks.steps import shell_quote

_CANDIDATES_TOKEN = "__LOCAL_CANDIDATE_COUNT__"

SPOOF_SCRIPT_TEMPLATE = r"""#!/bin/zsh
set -euo pipefail

# Find the hardware port named "Wi-Fi" (or "AirPort" on older macOS) and grab its device (en0/en1/...)
INTERFACE="$(
  networksetup -listallhardwareports \
  | awk '
      $0 ~ /Hardware Port: (Wi-Fi|AirPort)/ {found=1; next}
      found && $0 ~ /Device:/ && dev == "" {dev=$2; found=0}
      END {if (dev != "") print dev}
    '
)"

if [[ -z "${INTERFACE:-}" ]]; then
  echo "Couldn't find a Wi-Fi interface (Wi-Fi/AirPort)."
  echo "Open System Settings and make sure Wi-Fi exists, then try again."
  exit 1
fi

echo "Using Wi-Fi interface: $INTERFACE"

CURRENT_MAC=$(ifconfig "$INTERFACE" | awk "/ether/ {print \$2; exit}")
if [[ -z "${CURRENT_MAC:-}" ]]; then
  echo "Couldn't read current MAC address for $INTERFACE."
  exit 1
fi
echo "Current MAC: $CURRENT_MAC"

AIRPORT_CMD="/System/Library/PrivateFrameworks/Apple80211.framework/Versions/Current/Resources/airport"
if [[ ! -x "$AIRPORT_CMD" ]]; then
  AIRPORT_CMD="/System/Library/PrivateFrameworks/Apple80211.framework/Resources/airport"
fi

disconnect_wifi() {
  networksetup -setairportpower "$INTERFACE" on
  sleep 1
  if [[ -x "$AIRPORT_CMD" ]]; then
    "$AIRPORT_CMD" -z || true
  else
    networksetup -setairportpower "$INTERFACE" off
    sleep 2
    networksetup -setairportpower "$INTERFACE" on
  fi
  sleep 2
}

# Same vendor prefix, locally administered bit set, multicast bit cleared.
generate_current_prefix_candidate() {
  local o1 o2 o3
  IFS=":" read -r o1 o2 o3 _ <<< "$CURRENT_MAC"
  local first=$(( (16#$o1 | 2) & 254 ))
  printf "%02x:%s:%s:%02x:%02x:%02x" \
    "$first" "$o2" "$o3" $((RANDOM%256)) $((RANDOM%256)) $((RANDOM%256))
}

generate_local_candidate() {
  local prefixes=(02 06 0a 0e)
  local idx=$((RANDOM % ${#prefixes[@]}))
  local pfx="${prefixes[$((idx + 1))]}"
  printf "%s:%02x:%02x:%02x:%02x:%02x" \
    "$pfx" $((RANDOM%256)) $((RANDOM%256)) $((RANDOM%256)) $((RANDOM%256)) $((RANDOM%256))
}

apply_mac() {
  local mac="$1"
  if ifconfig "$INTERFACE" lladdr "$mac" >/dev/null 2>&1; then
    return 0
  fi
  if ifconfig "$INTERFACE" ether "$mac" >/dev/null 2>&1; then
    return 0
  fi
  return 1
}

echo "Step 1: Disconnecting from Wi-Fi while keeping interface available..."
disconnect_wifi

# Some drivers only accept specific patterns. Try a current-prefix variant first,
# then additional locally administered random candidates.
CANDIDATES=()
CANDIDATES+=("$(generate_current_prefix_candidate)")
for (( i = 0; i < __LOCAL_CANDIDATE_COUNT__; i++ )); do
  CANDIDATES+=("$(generate_local_candidate)")
done

APPLIED_MAC=""
for candidate in "${CANDIDATES[@]}"; do
  echo "Step 2: Trying MAC candidate: $candidate"
  if apply_mac "$candidate"; then
    APPLIED_MAC="$candidate"
    break
  fi
  disconnect_wifi
done

if [[ -z "$APPLIED_MAC" ]]; then
  echo "ERROR: macOS rejected all generated MAC candidates for $INTERFACE."
  echo "This can happen on newer hardware/OS builds that block Wi-Fi MAC changes."
  exit 1
fi

echo "SUCCESS: Applied MAC candidate: $APPLIED_MAC"

echo "Step 3: Refreshing network hardware..."
networksetup -detectnewhardware

FINAL_MAC=$(ifconfig "$INTERFACE" | awk "/ether/ {print \$2; exit}")
echo "Final Check: Current MAC on $INTERFACE is: $FINAL_MAC"
echo "You can now open Zoom."
"""

ZOOM_SANDBOX_PROFILE = r"""(version 1)
(allow default)
(deny file-read*
    (regex
        #"^/Users/[^.]+/Library/Application Support/zoom.us/data/.*\.db$"
        #"^/Users/[^.]+/Library/Application Support/zoom.us/data/.*\.db-journal$"
    )
)"""


def render_spoof_script(local_candidate_count: int = 4) -> str:
    count = max(1, int(local_candidate_count))
    return SPOOF_SCRIPT_TEMPLATE.replace(_CANDIDATES_TOKEN, str(count))


def zoom_launch_command(zoom_executable: str, profile: str = ZOOM_SANDBOX_PROFILE) -> str:
    # stdio is redirected so Zoom is fully detached and the launching shell's pipes close at once.
    return (
        f"nohup sandbox-exec -p {shell_quote(profile)} {shell_quote(zoom_executable)} "
        "</dev/null >/dev/null 2>&1 &"
    )
